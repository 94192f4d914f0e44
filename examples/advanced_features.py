"""
Advanced Gatehouse features example.

This example demonstrates advanced Gatehouse features:
- Async resolvers
- Nested combinators
- Fluent builder rules with explicit deny
- File-based decision auditing
- Construction error handling
"""

import asyncio
import os
import tempfile

from gatehouse import (
    CheckerConfig,
    Effect,
    PermissionChecker,
    PolicyBuilder,
    PolicyConstructionError,
    build_and_policy,
    build_not_policy,
    build_or_policy,
    build_rbac_policy,
)

TEAM_MEMBERS = {"platform": {"ana", "ben"}, "payments": {"cy"}}


async def team_roles(user):
    await asyncio.sleep(0)  # pretend this hits a directory service
    return [f"team:{team}" for team, members in TEAM_MEMBERS.items() if user in members]


async def advanced_example():
    """Demonstrate advanced Gatehouse features"""
    print("Advanced Gatehouse Example")
    print("=" * 30)

    # 1. Async RBAC behind a deploy freeze gate
    team_policy = build_rbac_policy(
        required_roles_resolver=lambda service, action: [f"team:{service}"],
        user_roles_resolver=team_roles,
        name="TeamOwnership",
    )
    freeze = (
        PolicyBuilder("DeployFreeze")
        .actions(lambda action: action == "deploy")
        .context(lambda ctx: ctx.get("freeze", False))
        .build()
    )
    on_call_override = (
        PolicyBuilder("OnCallOverride")
        .context(lambda ctx: ctx.get("incident") is not None)
        .build()
    )
    deploy_policy = build_and_policy(
        [team_policy, build_or_policy([build_not_policy(freeze), on_call_override], name="FreezeGate")],
        name="DeployAccess",
    )

    # 2. File-based audit trail
    audit_path = os.path.join(tempfile.gettempdir(), "gatehouse-example-audit.log")
    config = CheckerConfig(audit_enabled=True, audit_logger_type="file", audit_file_path=audit_path)
    checker = PermissionChecker(config=config)
    checker.add_policy(deploy_policy)

    for user, ctx in (("ana", {}), ("ana", {"freeze": True}), ("ana", {"freeze": True, "incident": "INC-7"}), ("cy", {})):
        result = await checker.evaluate_access(user, "platform", "deploy", ctx)
        print(f"✓ {user} deploy {ctx}: {result.summary()}")

    records = await checker.audit_logger.get_records()
    print(f"✓ {len(records)} decisions written to {audit_path}")

    # 3. Explicit deny rules report why they denied
    no_deletes = PolicyBuilder("NoDeletes").actions(lambda action: action == "delete").effect(Effect.DENY).build()
    for action in ("delete", "read"):
        result = await no_deletes.evaluate_access("ana", "platform", action, {})
        print(f"✓ NoDeletes on {action}: {result.format()}")

    # 4. Construction errors are raised immediately
    try:
        build_or_policy([])
    except PolicyConstructionError as e:
        print(f"✓ Rejected empty combinator: {e}")


if __name__ == "__main__":
    asyncio.run(advanced_example())
