"""CogniCare: cognitive screening risk scoring, trends and alerts."""

__version__ = "0.1.0"
