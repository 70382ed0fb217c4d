from .roi_viewmodel import RoiViewModel

__all__ = ["RoiViewModel"]
