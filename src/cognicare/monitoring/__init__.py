"""Monitoring module for cognitive risk alerts.

Compares each user's recent performance with their history, baseline and
stored risk scores, and raises alerts when thresholds are crossed.
"""

from cognicare.monitoring.alert_monitor import (
    AlertMonitor,
    alert_monitor,
    create_alert_monitor,
)
from cognicare.monitoring.types import AlertSeverity, AlertType, MonitorConfig, RiskAlert

__all__ = [
    "AlertMonitor",
    "AlertSeverity",
    "AlertType",
    "MonitorConfig",
    "RiskAlert",
    "alert_monitor",
    "create_alert_monitor",
]
