"""SmartSummary: audio capture to meeting-note pipeline."""

__version__ = "0.1.0"
