from .sweep_expired_files import SweepExpiredFilesUseCase

__all__ = ["SweepExpiredFilesUseCase"]
