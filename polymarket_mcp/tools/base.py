"""Tool descriptors and the uniform result envelope.

Every tool call goes Validate -> Execute -> Format -> Respond and ends in a
ToolResult; no exception ever reaches the host.
"""

import json
from dataclasses import asdict, dataclass, is_dataclass
from decimal import Decimal, InvalidOperation
from typing import Any, Callable, Dict, List, Optional, Type

from loguru import logger
from pydantic import BaseModel, ValidationError

OK = "ok"
NOT_FOUND = "not_found"
ERROR = "error"


def _to_jsonable(payload: Any) -> Any:
    if is_dataclass(payload) and not isinstance(payload, type):
        return asdict(payload)
    if isinstance(payload, list):
        return [_to_jsonable(p) for p in payload]
    if isinstance(payload, dict):
        return {k: _to_jsonable(v) for k, v in payload.items()}
    return payload


@dataclass(frozen=True)
class ToolResult:
    """Tagged result: ok (JSON payload), not_found, or error (message)."""

    kind: str
    text: str

    @property
    def is_error(self) -> bool:
        return self.kind == ERROR

    @classmethod
    def ok(cls, payload: Any) -> "ToolResult":
        return cls(OK, json.dumps(_to_jsonable(payload), indent=2, default=str))

    @classmethod
    def message(cls, text: str) -> "ToolResult":
        """Plain-text success, e.g. an empty search."""
        return cls(OK, text)

    @classmethod
    def not_found(cls, text: str) -> "ToolResult":
        return cls(NOT_FOUND, text)

    @classmethod
    def error(cls, text: str) -> "ToolResult":
        return cls(ERROR, text)


def validation_message(err: ValidationError) -> str:
    parts = []
    for e in err.errors():
        loc = ".".join(str(p) for p in e.get("loc", ()))
        msg = e.get("msg", "invalid value")
        parts.append(f"{loc}: {msg}" if loc else msg)
    return "; ".join(parts)


def parse_decimal(value: str) -> Decimal:
    """Finite Decimal from a string or ValueError."""
    try:
        d = Decimal(str(value).strip())
    except (InvalidOperation, ValueError) as e:
        raise ValueError(f"{value!r} is not a number") from e
    if not d.is_finite():
        raise ValueError(f"{value!r} is not a finite number")
    return d


class NoArgs(BaseModel):
    pass


@dataclass
class ToolSpec:
    """A named tool: input model, handler and error prefix.

    write_guard runs before anything else for mutating tools.
    """

    name: str
    description: str
    args_model: Type[BaseModel]
    handler: Callable[[Any], ToolResult]
    error_prefix: str
    write_guard: Optional[Callable[[], None]] = None

    @property
    def mutating(self) -> bool:
        return self.write_guard is not None

    def input_schema(self) -> Dict[str, Any]:
        schema = self.args_model.model_json_schema()
        schema.setdefault("properties", {})
        schema.pop("title", None)
        return schema

    def call(self, arguments: Optional[Dict[str, Any]] = None) -> ToolResult:
        try:
            if self.write_guard is not None:
                self.write_guard()
            try:
                args = self.args_model.model_validate(arguments or {})
            except ValidationError as e:
                logger.debug(f"{self.name}: invalid arguments: {e}")
                return ToolResult.error(f"{self.error_prefix}: Invalid arguments: {validation_message(e)}")
            return self.handler(args)
        except Exception as e:
            logger.error(f"{self.name} failed: {e}")
            return ToolResult.error(f"{self.error_prefix}: {e}")


def tool_names(tools: List[ToolSpec]) -> List[str]:
    return [t.name for t in tools]
