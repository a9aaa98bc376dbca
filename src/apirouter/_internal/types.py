"""Shared type aliases used across apirouter modules."""

from collections.abc import Callable
from typing import Any, TypeAlias

# Route handler: called as handler(request, response, params), sync or async
Handler: TypeAlias = Callable[..., Any]

# Host transport hook: called as sender(response) once per dispatch, sync or async
Sender: TypeAlias = Callable[..., Any]

# Matched path parameters: placeholder name -> captured segment
Params: TypeAlias = dict[str, str]
