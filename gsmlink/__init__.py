"""SIM800L GSM modem driver and SMS monitor: AT commands, SMS, signal and battery."""

__version__ = "0.1.0"
__all__ = ["__version__"]