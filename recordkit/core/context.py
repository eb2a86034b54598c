from contextvars import ContextVar, Token
from typing import Optional

# Correlation id shared by every log line of one unit of work
correlation_id_ctx: ContextVar[Optional[str]] = ContextVar("correlation_id", default=None)

def get_correlation_id() -> str:
    return correlation_id_ctx.get() or "n/a"

def set_correlation_id(correlation_id: str) -> Token:
    return correlation_id_ctx.set(correlation_id)

def reset_correlation_id(token: Token):
    correlation_id_ctx.reset(token)
