"""Shared error types for the protocol layer."""


class ProtocolError(Exception):
    """Base error for all protocol-layer failures."""


class MethodNotFoundError(ProtocolError):
    """The request named a method the dispatcher does not serve."""

    def __init__(self, method: str) -> None:
        self.method = method
        super().__init__(f"Method not found: {method}")


class ToolNotFoundError(ProtocolError):
    """Requested tool does not exist in the registry."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unknown tool: {name}")


class PromptNotFoundError(ProtocolError):
    """Requested prompt does not exist in the registry."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unknown prompt: {name}")


class ToolExecutionError(ProtocolError):
    """A tool invocation failed inside its handler."""

    def __init__(self, name: str, detail: str = "") -> None:
        self.name = name
        self.detail = detail
        super().__init__(f"Tool execution failed: {name}" + (f": {detail}" if detail else ""))


class ToolArgumentError(ToolExecutionError):
    """A required tool argument was not supplied."""

    def __init__(self, name: str, argument: str) -> None:
        self.argument = argument
        super().__init__(name, f"missing required argument '{argument}'")
