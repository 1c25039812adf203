"""
Explicit handler results.

Handlers return Ok(value) or Err(error) instead of writing responses. The
router turns an Ok into the success envelope and raises the error of an Err
into Flask's error handlers, so each request gets exactly one terminal write.
"""
from dataclasses import dataclass
from typing import Any, Union


@dataclass(frozen=True)
class Ok:
    value: Any
    status_code: int = 200


@dataclass(frozen=True)
class Err:
    error: BaseException


Result = Union[Ok, Err]
