"""Report subpackage: diagnostics produced by every other component.

Re-exports:
- LogLevel: ordered message severity
- ProcessingMessage: one structured, templated diagnostic
- ProcessingReport: base of ordered message collections
- ListProcessingReport: in-memory report
- LoggingProcessingReport: in-memory report that also forwards to ``logging``
"""

from json_schema_core.report.levels import LogLevel
from json_schema_core.report.message import ProcessingMessage
from json_schema_core.report.report import (
    ListProcessingReport,
    LoggingProcessingReport,
    ProcessingReport,
)

__all__ = [
    "ListProcessingReport",
    "LogLevel",
    "LoggingProcessingReport",
    "ProcessingMessage",
    "ProcessingReport",
]
