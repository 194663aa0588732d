"""
Models package
"""


from app.models.video import Video
from app.models.frame import Frame


__all__ = ["Video", "Frame"]
