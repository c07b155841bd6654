"""Configuration system."""

from signal_core.config.loader import load_config
from signal_core.config.schema import AcceptanceConfig, AppConfig, SignalConfig, SimulatorConfig

__all__ = ["AcceptanceConfig", "AppConfig", "SignalConfig", "SimulatorConfig", "load_config"]
