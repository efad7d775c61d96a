"""Cloud provider gateways for storage and vision.

Provider modules are imported on demand (see ``core.factories``) so that
only the selected SDK has to be importable.
"""
