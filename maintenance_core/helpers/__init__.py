"""Helper modules for the maintenance core.

- validation_helpers: voluptuous schemas for host-supplied records
"""
