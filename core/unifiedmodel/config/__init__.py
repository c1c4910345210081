"""
Configuration: YAML profiles and environment variable helpers.
"""
