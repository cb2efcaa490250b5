"""
Jump List artifacts: applications identified by their AutomaticDestinations AppID.
"""

from .collector import collect_jump_list_apps, discover_appids

__all__ = ["collect_jump_list_apps", "discover_appids"]
