"""
This package provides the configuration and mixin helpers shared by the classes in gimbal.
"""
