"""
Version information for Dice-Poker-over-SSH.
"""

VERSION = "0.1.0"
BUILD_DATE = "dev"
COMMIT_HASH = "unknown"


def get_version_info():
    """Get formatted version information"""
    return {
        'version': VERSION,
        'build_date': BUILD_DATE,
        'commit_hash': COMMIT_HASH
    }
