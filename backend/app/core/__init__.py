"""
Core configuration, persistence and security utilities
"""
