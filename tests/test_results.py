"""
Tests for evaluation results, traces and access evaluations.
"""

import pytest

from gatehouse.authz import (
    AccessEvaluation,
    CombineOp,
    CombinedResult,
    DeniedResult,
    EvalTrace,
    GrantedResult,
    Outcome,
)


class TestLeafResults:
    """Test granted and denied leaf results."""

    def test_granted_result(self):
        result = GrantedResult(policy_type="Rbac", reason="User has required role")
        assert result.is_granted()
        assert result.granted is True
        assert result.format() == "✔ Rbac GRANTED User has required role"

    def test_granted_result_without_reason(self):
        assert GrantedResult(policy_type="Rbac").format() == "✔ Rbac GRANTED"

    def test_denied_result(self):
        result = DeniedResult(policy_type="Abac", reason="Condition evaluated to false")
        assert not result.is_granted()
        assert result.format() == "✘ Abac DENIED: Condition evaluated to false"

    def test_denied_result_without_reason(self):
        assert DeniedResult(policy_type="Abac").format() == "✘ Abac DENIED"

    def test_results_are_immutable(self):
        result = GrantedResult(policy_type="Rbac")
        with pytest.raises(AttributeError):
            result.policy_type = "Other"


class TestCombinedResult:
    """Test combined result rendering and invariants."""

    def test_children_are_frozen_into_tuple(self):
        children = [GrantedResult(policy_type="A")]
        combined = CombinedResult(
            policy_type="AndPolicy", granted=True, operation=CombineOp.AND, children=children
        )
        children.append(DeniedResult(policy_type="B"))
        assert len(combined.children) == 1
        assert isinstance(combined.children, tuple)

    def test_reason_is_absent(self):
        combined = CombinedResult(policy_type="OrPolicy", granted=False, operation=CombineOp.OR)
        assert combined.reason is None

    def test_nested_format_indents_every_level(self):
        inner = CombinedResult(
            policy_type="Inner",
            granted=True,
            operation=CombineOp.NOT,
            children=[DeniedResult(policy_type="Leaf", reason="nope")],
        )
        outer = CombinedResult(
            policy_type="Outer",
            granted=True,
            operation=CombineOp.AND,
            children=[GrantedResult(policy_type="First"), inner],
        )
        assert outer.format().split("\n") == [
            "✔ Outer (AND)",
            "  ✔ First GRANTED",
            "  ✔ Inner (NOT)",
            "    ✘ Leaf DENIED: nope",
        ]

    def test_display_prints_tree(self, capsys):
        combined = CombinedResult(
            policy_type="OrPolicy",
            granted=False,
            operation=CombineOp.OR,
            children=[DeniedResult(policy_type="X", reason="no")],
        )
        combined.display()
        assert "✘ OrPolicy (OR)" in capsys.readouterr().out

    def test_to_dict(self):
        combined = CombinedResult(
            policy_type="NotPolicy",
            granted=True,
            operation="NOT",
            children=[DeniedResult(policy_type="X", reason="no")],
        )
        data = combined.to_dict()
        assert data["operation"] == "NOT"
        assert data["granted"] is True
        assert data["children"] == [{"policy_type": "X", "granted": False, "reason": "no"}]


class TestEvalTrace:
    """Test evaluation traces."""

    def test_empty_trace(self):
        assert EvalTrace().format() == "No evaluation trace available"
        assert EvalTrace().to_dict() is None

    def test_trace_formats_root(self):
        trace = EvalTrace(GrantedResult(policy_type="A"))
        assert trace.format() == "✔ A GRANTED"


class TestAccessEvaluation:
    """Test the final access evaluation."""

    def test_granted_factory(self):
        evaluation = AccessEvaluation.granted("Rbac", EvalTrace(GrantedResult(policy_type="Rbac")))
        assert evaluation.is_granted()
        assert evaluation.outcome is Outcome.GRANTED
        assert evaluation.policy_type == "Rbac"
        assert evaluation.reason is None
        assert evaluation.summary() == "[GRANTED] by Rbac"

    def test_granted_with_reason(self):
        evaluation = AccessEvaluation.granted("Rbac", EvalTrace(), reason="editor")
        assert evaluation.summary() == "[GRANTED] by Rbac - editor"

    def test_denied_factory(self):
        evaluation = AccessEvaluation.denied("All policies denied access", EvalTrace())
        assert not evaluation.is_granted()
        assert evaluation.outcome is Outcome.DENIED
        assert evaluation.policy_type is None
        assert evaluation.summary() == "[DENIED] - All policies denied access"

    def test_denied_requires_reason(self):
        with pytest.raises(ValueError):
            AccessEvaluation.denied("", EvalTrace())

    def test_denied_cannot_name_a_policy(self):
        with pytest.raises(ValueError):
            AccessEvaluation(
                outcome=Outcome.DENIED, trace=EvalTrace(), reason="no", policy_type="Rbac"
            )

    def test_granted_requires_policy_type(self):
        with pytest.raises(ValueError):
            AccessEvaluation(outcome=Outcome.GRANTED, trace=EvalTrace())

    def test_display_trace(self):
        evaluation = AccessEvaluation.granted("A", EvalTrace(GrantedResult(policy_type="A")))
        assert evaluation.get_display_trace() == "\nEvaluation Trace:\n✔ A GRANTED"

    def test_display_trace_without_root(self):
        evaluation = AccessEvaluation.denied("no", EvalTrace())
        assert evaluation.get_display_trace() == "\n(No evaluation trace available)"

    def test_display_prints_summary(self, capsys):
        AccessEvaluation.denied("nope", EvalTrace()).display()
        assert capsys.readouterr().out.strip() == "[DENIED] - nope"

    def test_is_immutable(self):
        evaluation = AccessEvaluation.denied("no", EvalTrace())
        with pytest.raises(AttributeError):
            evaluation.reason = "yes"

    def test_to_dict(self):
        evaluation = AccessEvaluation.denied("no", EvalTrace(DeniedResult(policy_type="X")))
        assert evaluation.to_dict() == {
            "outcome": "Denied",
            "reason": "no",
            "policy_type": None,
            "trace": {"policy_type": "X", "granted": False, "reason": None},
        }
