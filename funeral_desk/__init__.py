"""Administrative API for a funeral-service business."""

__version__ = "0.1.0"
