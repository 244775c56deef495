"""Demo tools that talk back to the client while running.

These tools use their Exchange to send log and progress notifications
before returning.
"""

import asyncio
import time
from typing import Optional

from ..models import HandlerDescriptor, ParamSpec
from ..server.exchange import Exchange
from ..server.registry import CapabilityRegistry

LOG_SOURCE = "DemoTools"

MAX_STEPS = 10
MIN_DELAY_MS = 100
MAX_DELAY_MS = 2000
DEFAULT_DELAY_MS = 500

LOG_LEVELS_HELP = """MCP Log Levels (RFC 5424 severity):
- debug: Detailed debugging info
- info: General information
- notice: Normal but significant
- warning: Warning conditions
- error: Error conditions
- critical: Critical conditions
- alert: Immediate action needed
- emergency: System unusable"""

CAPABILITIES_INFO = """MCP (Model Context Protocol) Capabilities
==========================================

SERVER CAPABILITIES (what this server provides):
- Tools: Functions the AI can call (like this one!)
- Resources: Data the AI can read (document://, status://, etc.)
- Prompts: Pre-defined prompt templates
- Logging: Server can send log messages to client
- Progress: Server can report progress on long operations

CLIENT CAPABILITIES (depends on your MCP client):
- Roots: Client can provide filesystem roots
- Sampling: Client can generate AI content on server's behalf
- Elicitation: Client can request user input for server

Try these tools to explore:
- demo_logging: See logging in action
- demo_progress: Watch progress notifications
- add, subtract, multiply, divide: Basic calculator
- format_text, count_words: Text manipulation
- get_weather, roll_dice: Fun mock data"""


async def demo_logging(message: str, exchange: Exchange) -> str:
    """Send one log notification each at debug, info, and warning level."""
    await exchange.log("debug", LOG_SOURCE, f"Debug: Starting operation with message: {message}")
    await exchange.log("info", LOG_SOURCE, f"Info: Processing message: {message}")
    await exchange.log("warning", LOG_SOURCE, f"Warning: This is a demo warning for: {message}")

    return (
        "Sent log messages at debug, info, and warning levels!\n\n"
        "Check your MCP client's log output to see the messages.\n\n" + LOG_LEVELS_HELP
    )


async def demo_progress(
    steps: int,
    exchange: Exchange,
    delay_ms: Optional[int] = None,
    progress_token: Optional[str] = None,
) -> str:
    """Simulate a long-running task, reporting progress after each step.

    Args:
        steps: Number of steps (clamped to 1-10)
        exchange: Notification handle
        delay_ms: Pause between steps (clamped to 100-2000 ms, default 500)
        progress_token: Explicit token; otherwise the client's token is used,
            or one is generated

    Returns:
        Completion message
    """
    steps = max(1, min(MAX_STEPS, steps))
    delay = max(MIN_DELAY_MS, min(MAX_DELAY_MS, delay_ms)) if delay_ms is not None else DEFAULT_DELAY_MS

    await exchange.log("info", LOG_SOURCE, f"Starting progress demo with {steps} steps")

    token = progress_token or exchange.progress_token or f"demo-progress-{int(time.time() * 1000)}"
    await exchange.progress(0, steps, "Starting task...", token=token)

    for i in range(1, steps + 1):
        await asyncio.sleep(delay / 1000)
        await exchange.progress(i, steps, f"Completed step {i} of {steps}", token=token)
        await exchange.log("debug", LOG_SOURCE, f"Step {i} complete")

    return (
        f"Task completed! Processed {steps} steps with progress tracking.\n\n"
        "Check your MCP client to see if progress was displayed."
    )


def mcp_capabilities_info() -> str:
    return CAPABILITIES_INFO


async def demo_error_handling(error_type: str, exchange: Exchange) -> str:
    """Show how each kind of failure reaches the client.

    ``runtime`` raises, which the dispatcher reports as a HandlerFailure;
    the other types return ordinary text results.
    """
    await exchange.log("info", LOG_SOURCE, f"Testing error handling with type: {error_type}")

    kind = error_type.lower()
    if kind == "none":
        return "No error! Everything worked perfectly."
    if kind == "validation":
        await exchange.log("warning", LOG_SOURCE, "Validation error simulation")
        return (
            "Validation Error: This simulates a validation failure.\n"
            "In real tools, you'd check inputs and return helpful messages."
        )
    if kind == "runtime":
        await exchange.log("error", LOG_SOURCE, "About to throw runtime exception for demo")
        raise RuntimeError("This is a simulated runtime error to show how exceptions are handled!")
    if kind == "custom":
        await exchange.log("error", LOG_SOURCE, "Custom error condition")
        return (
            "Custom Error: Operation failed due to [simulated reason].\n"
            "Suggestion: Try a different approach or check your inputs."
        )
    return f"Unknown error type: {error_type}\nValid types: none, validation, runtime, custom"


def register_advanced_tools(registry: CapabilityRegistry) -> None:
    """Register the logging, progress, capability-info, and error demos."""
    registry.register(
        HandlerDescriptor.tool(
            "demo_logging",
            "Demonstrates MCP logging capabilities - sends different log levels to the client",
            [ParamSpec(name="message", description="A message to include in the logs")],
            wants_exchange=True,
        ),
        demo_logging,
    )
    registry.register(
        HandlerDescriptor.tool(
            "demo_progress",
            "Demonstrates progress notifications - simulates a long-running task with progress updates",
            [
                ParamSpec(name="steps", type="integer", description="Number of steps to simulate (1-10)"),
                ParamSpec(
                    name="delay_ms",
                    type="integer",
                    required=False,
                    description="Delay between steps in milliseconds (100-2000)",
                ),
                ParamSpec(
                    name="progress_token",
                    required=False,
                    description="Progress token from the request (if available)",
                ),
            ],
            wants_exchange=True,
        ),
        demo_progress,
    )
    registry.register(
        HandlerDescriptor.tool("mcp_capabilities_info", "Explains MCP server and client capabilities"),
        mcp_capabilities_info,
    )
    registry.register(
        HandlerDescriptor.tool(
            "demo_error_handling",
            "Demonstrates how MCP handles errors in tools",
            [
                ParamSpec(
                    name="error_type",
                    description="Type of error to simulate: none, validation, runtime, custom",
                )
            ],
            wants_exchange=True,
        ),
        demo_error_handling,
    )
