"""Processing Modules

This package contains the processing modules of the farm device mapping
service. Each module implements the ModuleProcessor interface.
"""
