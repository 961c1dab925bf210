"""
Version information for tracerelay.

A release build stamps ``__version__`` with build metadata:
MAJOR.MINOR.PATCH[-PHASE]_BRANCH_BUILD-YYYYMMDD-COMMITHASH
"""

MAJOR = 0
MINOR = 1
PATCH = 0
PHASE = "alpha"  # None, "alpha", "beta", "rc1", ...

__version__ = "0.1.0-alpha_main_1-20261018-local"
__app_name__ = "tracerelay"


def get_base_version(version=None, phase=PHASE):
    """Return MAJOR.MINOR.PATCH[-PHASE] for a stamped or plain version."""
    version = __version__ if version is None else version
    if "_" in version:
        return version.split("_")[0]
    if phase and "-" not in version:
        return f"{version}-{phase}"
    return version


VERSION = __version__
BASE_VERSION = get_base_version()
