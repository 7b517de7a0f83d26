"""Version information for remoteserver."""

__version__ = "0.3.0"
__version_info__ = (0, 3, 0)

__license__ = "MIT"
__description__ = "Reachability and security-posture assertions for remote servers"
