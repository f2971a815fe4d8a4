"""SIRI StopMonitoring request builder.

Invariants:
    - Output shape is fixed: optional LineRef/OperatorRef are omitted, never emitted empty
    - Every interpolated value is XML-escaped
    - MaximumStopVisits is always 10
"""

from datetime import datetime, timezone
from xml.sax.saxutils import escape

SIRI_NAMESPACE = "http://www.siri.org.uk/siri"
SIRI_VERSION = "2.0"
MAX_STOP_VISITS = 10


def build_stop_monitoring_request(
    stop_code: str,
    line_ref: str | None = None,
    operator_ref: str | None = None,
    requestor_ref: str = "CashBus",
    now: datetime | None = None,
) -> str:
    """Render the StopMonitoring ServiceRequest XML for one stop."""
    timestamp = (now or datetime.now(timezone.utc)).isoformat()
    optional = ""
    if line_ref:
        optional += f"\n      <LineRef>{escape(str(line_ref))}</LineRef>"
    if operator_ref:
        optional += f"\n      <OperatorRef>{escape(str(operator_ref))}</OperatorRef>"

    return (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        f'<Siri xmlns="{SIRI_NAMESPACE}" version="{SIRI_VERSION}">\n'
        "  <ServiceRequest>\n"
        f"    <RequestTimestamp>{timestamp}</RequestTimestamp>\n"
        f"    <RequestorRef>{escape(requestor_ref)}</RequestorRef>\n"
        f'    <StopMonitoringRequest version="{SIRI_VERSION}">\n'
        f"      <RequestTimestamp>{timestamp}</RequestTimestamp>\n"
        f"      <MonitoringRef>{escape(str(stop_code))}</MonitoringRef>"
        f"{optional}\n"
        f"      <MaximumStopVisits>{MAX_STOP_VISITS}</MaximumStopVisits>\n"
        "    </StopMonitoringRequest>\n"
        "  </ServiceRequest>\n"
        "</Siri>"
    )
