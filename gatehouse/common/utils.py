# Copyright (c) 2025 Gimel Foundation and the persons identified as the document authors.
# All rights reserved. This file is subject to the Gimel Foundation's Legal Provisions Relating to GiFo Documents.
# See http://GimelFoundation.com or https://github.com/Gimel-Foundation for details.
# Code Components extracted from GiFo-RfC 0111 must include this license text and are provided without warranty.

"""
Common utilities and helper functions for Gatehouse.
"""

import inspect
import uuid
from datetime import datetime, timezone
from typing import Any


def generate_id(prefix: str = "") -> str:
    """Generate a unique identifier with optional prefix."""
    unique_id = str(uuid.uuid4())
    return f"{prefix}{unique_id}" if prefix else unique_id


def current_timestamp() -> datetime:
    """Get current UTC timestamp."""
    return datetime.now(timezone.utc)


async def maybe_await(value: Any) -> Any:
    """
    Resolve the return value of a user-supplied callable.

    Resolvers, conditions and predicates may be plain functions or coroutine
    functions. Awaitables are awaited, anything else is returned as is.
    """
    if inspect.isawaitable(value):
        return await value
    return value


def describe(value: Any, max_length: int = 200) -> str:
    """Short printable representation of an opaque request value."""
    text = repr(value)
    if len(text) > max_length:
        return text[:max_length - 3] + "..."
    return text
