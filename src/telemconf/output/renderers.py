"""Rich renderers for ServiceResult.

``validate`` prints a one-line verdict; ``show`` prints the bound
configuration as a tree. ``--json`` bypasses both.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from rich.text import Text
from rich.tree import Tree

from telemconf.output.console import create_console, get_output

if TYPE_CHECKING:
    from telemconf.services.result import ServiceResult


def format_result(result: ServiceResult, *, json_output: bool = False) -> str:
    """Render *result* as JSON or as human-readable text."""
    if json_output:
        return json.dumps(result.model_dump(mode="json"), indent=2, sort_keys=True)

    console = create_console()
    if not result.ok:
        code = result.error.code if result.error else "ERROR"
        message = result.error.message if result.error else "Unknown error"
        console.print(Text.assemble(("ERROR", "tc.error"), f" [{code}] {message}"))
    elif result.op == "show":
        console.print(_configuration_tree(result.data))
    else:
        console.print(Text.assemble(("OK", "tc.ok"), f" {result.data.get('path', '')}"))
    return get_output(console).rstrip("\n")


def _configuration_tree(data: dict[str, Any]) -> Tree:
    configuration = data.get("configuration", {})
    tree = Tree(Text(data.get("path", "configuration"), style="tc.value"))

    tree.add(_pair("InstrumentationKey", configuration.get("instrumentation_key")))
    tree.add(_pair("DisableTelemetry", configuration.get("disable_telemetry")))

    channel = configuration.get("telemetry_channel")
    if channel is not None:
        _add_object(tree.add(Text("TelemetryChannel", style="tc.key")), channel)

    for label, key in (
        ("TelemetryInitializers", "telemetry_initializers"),
        ("ContextInitializers", "context_initializers"),
        ("TelemetryModules", "telemetry_modules"),
    ):
        branch = tree.add(Text(label, style="tc.key"))
        for item in configuration.get(key, []):
            _add_object(branch, item)
    return tree


def _add_object(parent: Tree, obj: dict[str, Any]) -> None:
    node = parent.add(Text(obj["type"], style="tc.type"))
    for name, value in obj.get("properties", {}).items():
        node.add(_pair(name, value))


def _pair(name: str, value: Any) -> Text:
    return Text.assemble((f"{name}: ", "tc.key"), (str(value), "tc.value"))
