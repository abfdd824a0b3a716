from contextvars import ContextVar

# Identifier of the HTTP request currently being handled; set by the server middleware
request_id: ContextVar[str | None] = ContextVar[str | None]("request_id", default=None)
