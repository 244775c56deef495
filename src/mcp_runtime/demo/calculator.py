"""Calculator demo tools."""

from ..models import HandlerDescriptor, ParamSpec
from ..server.registry import CapabilityRegistry


def _operands(first: str = "First number", second: str = "Second number") -> list[ParamSpec]:
    return [
        ParamSpec(name="a", type="number", description=first),
        ParamSpec(name="b", type="number", description=second),
    ]


def add(a: float, b: float) -> float:
    return a + b


def subtract(a: float, b: float) -> float:
    return a - b


def multiply(a: float, b: float) -> float:
    return a * b


def divide(a: float, b: float) -> str:
    """Divide a by b.

    Division by zero is reported as a normal result, not a fault.
    """
    if b == 0:
        return "Error: Cannot divide by zero"
    return str(a / b)


def register_calculator_tools(registry: CapabilityRegistry) -> None:
    """Register add, subtract, multiply, and divide."""
    registry.register(HandlerDescriptor.tool("add", "Add two numbers together", _operands()), add)
    registry.register(
        HandlerDescriptor.tool("subtract", "Subtract the second number from the first", _operands()),
        subtract,
    )
    registry.register(HandlerDescriptor.tool("multiply", "Multiply two numbers", _operands()), multiply)
    registry.register(
        HandlerDescriptor.tool(
            "divide",
            "Divide the first number by the second",
            _operands("Dividend (number to be divided)", "Divisor (number to divide by)"),
        ),
        divide,
    )
