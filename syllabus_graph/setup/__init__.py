"""
Database setup: named scripts run in dependency order by the orchestrator.

Run with `python -m syllabus_graph.setup <command>` or `syllabus-setup <command>`.
"""

from syllabus_graph.setup.orchestrator import SetupOrchestrator
from syllabus_graph.setup.script import SetupOptions, SetupPhase, SetupResult, SetupScript
from syllabus_graph.setup.scripts import default_scripts

__all__ = [
    "SetupOrchestrator",
    "SetupOptions",
    "SetupPhase",
    "SetupResult",
    "SetupScript",
    "default_scripts",
]
