"""
Gatehouse Demo Application

Copyright (c) 2025 Gimel Foundation and the persons identified as the document authors.
All rights reserved. This file is subject to the Gimel Foundation's Legal Provisions Relating to GiFo Documents.
See http://GimelFoundation.com or https://github.com/Gimel-Foundation for details.
Code Components extracted from GiFo-RfC 0111 must include this license text and are provided without warranty.

This demo walks through a small document-sharing scenario:
- Role-based access for editors and admins
- Attribute-based access to public documents
- Relationship-based access for owners
- Combining policies with AND/OR/NOT
- A fluent builder rule for suspended accounts
- Reading decisions back from the audit trail
"""

import asyncio
import logging
import sys
from dataclasses import dataclass, field
from typing import Dict, List

from gatehouse.audit.logger import MemoryDecisionLogger
from gatehouse.authz import (
    PermissionChecker,
    PolicyBuilder,
    build_abac_policy,
    build_and_policy,
    build_not_policy,
    build_or_policy,
    build_rbac_policy,
    build_rebac_policy,
)


@dataclass
class User:
    id: str
    roles: List[str] = field(default_factory=list)
    suspended: bool = False


@dataclass
class Document:
    id: str
    owner_id: str
    is_public: bool = False


ACTION_ROLES: Dict[str, List[str]] = {
    "read": ["viewer", "editor", "admin"],
    "write": ["editor", "admin"],
    "delete": ["admin"],
}


def build_checker(audit_logger: MemoryDecisionLogger) -> PermissionChecker:
    """Assemble the demo policies"""
    rbac = build_rbac_policy(
        required_roles_resolver=lambda doc, action: ACTION_ROLES.get(action, []),
        user_roles_resolver=lambda user: user.roles,
        name="DocumentRoles",
    )

    public_read = build_abac_policy(
        lambda user, doc, action, ctx: doc.is_public and action == "read",
        name="PublicRead",
    )

    async def owns(user, doc, relationship):
        await asyncio.sleep(0)  # stands in for a relationship store lookup
        return relationship == "owner" and doc.owner_id == user.id

    owner = build_rebac_policy("owner", owns, name="DocumentOwner")

    suspended = PolicyBuilder("SuspendedAccount").subjects(lambda user: user.suspended).build()

    checker = PermissionChecker(audit_logger=audit_logger)
    checker.add_policy(
        build_and_policy(
            [
                build_not_policy(suspended, name="NotSuspended"),
                build_or_policy([rbac, owner, public_read], name="AnyGrant"),
            ],
            name="DocumentAccess",
        )
    )
    return checker


async def run_demo() -> int:
    """Run the demo scenario"""
    print("Gatehouse Demo Application")
    print("=" * 50)
    print()

    audit_logger = MemoryDecisionLogger()
    checker = build_checker(audit_logger)

    alice = User(id="alice", roles=["editor"])
    bob = User(id="bob", roles=["viewer"])
    carol = User(id="carol", roles=["admin"], suspended=True)
    report = Document(id="report", owner_id="bob")
    handbook = Document(id="handbook", owner_id="alice", is_public=True)

    scenarios = [
        ("Editor writes a document", alice, report, "write"),
        ("Viewer deletes a document they own", bob, report, "delete"),
        ("Viewer deletes someone else's document", bob, handbook, "delete"),
        ("Suspended admin deletes a document", carol, report, "delete"),
        ("Anyone reads a public document", User(id="guest"), handbook, "read"),
    ]

    for step, (title, user, doc, action) in enumerate(scenarios, 1):
        print(f"Step {step}: {title}")
        print("-" * 40)
        result = await checker.evaluate_access(user, doc, action, {})
        print(f"  {result.summary()}")
        print(result.get_display_trace())
        print()

    print(f"Step {len(scenarios) + 1}: Audit Trail")
    print("-" * 40)
    records = await audit_logger.get_records()
    print(f"✓ Retrieved {len(records)} decision records")
    denied = await audit_logger.get_records(granted=False)
    print(f"  - Denied: {len(denied)}")
    print()

    print("Demo completed successfully! 🎉")
    return 0


def main() -> int:
    """Console script entry point"""
    logging.basicConfig(level=logging.WARNING)
    try:
        return asyncio.run(run_demo())
    except KeyboardInterrupt:
        print("\nDemo interrupted by user")
        return 1


if __name__ == "__main__":
    sys.exit(main())
