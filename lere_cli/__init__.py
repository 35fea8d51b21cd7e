"""
Lere CLI - Offline administration of a plugin configuration file.

Usage:
    lere-cli --config config.yml --world world=320 zones
    lere-cli --config config.yml access-add <uuid>
    lere-cli --config config.yml access-remove <uuid>
    lere-cli --config config.yml access-list
    lere-cli --config config.yml access-check <uuid>
"""

__version__ = "1.0.0"
