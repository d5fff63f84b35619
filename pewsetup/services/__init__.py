"""Application services."""

from .setup import InstalledTool, Phase, SetupService, check_platform, run_phase

__all__ = ["InstalledTool", "Phase", "SetupService", "check_platform", "run_phase"]
