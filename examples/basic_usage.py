"""
Basic Gatehouse usage example.

This example demonstrates the fundamental Gatehouse operations:
- Building RBAC, ABAC and ReBAC policies
- Registering them with a PermissionChecker
- Reading the decision and its trace
"""

import asyncio

from gatehouse import (
    PermissionChecker,
    build_abac_policy,
    build_rbac_policy,
    build_rebac_policy,
)


async def basic_example():
    """Demonstrate basic Gatehouse usage"""
    print("Basic Gatehouse Example")
    print("=" * 30)

    # 1. Create policies
    roles = build_rbac_policy(
        required_roles_resolver=lambda doc, action: ["editor", "admin"] if action == "write" else ["viewer"],
        user_roles_resolver=lambda user: user["roles"],
    )
    business_hours = build_abac_policy(
        lambda user, doc, action, ctx: action == "read" and ctx.get("business_hours", False),
        name="BusinessHoursRead",
    )
    owner = build_rebac_policy(
        "owner",
        lambda user, doc, relationship: doc["owner"] == user["id"],
    )
    print("✓ Created policies")

    # 2. Create the checker
    checker = PermissionChecker()
    for policy in (roles, business_hours, owner):
        checker.add_policy(policy)
    print(f"✓ Checker has {len(checker.policies)} policies")

    # 3. Evaluate some requests
    editor = {"id": "u1", "roles": ["editor"]}
    stranger = {"id": "u2", "roles": []}
    document = {"id": "d1", "owner": "u3"}

    result = await checker.evaluate_access(editor, document, "write", {})
    print(f"✓ Editor write: {result.summary()}")

    result = await checker.evaluate_access(stranger, document, "write", {"business_hours": True})
    print(f"✓ Stranger write: {result.summary()}")
    print(result.get_display_trace())


if __name__ == "__main__":
    asyncio.run(basic_example())
