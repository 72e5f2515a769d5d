from .path_validator import PathValidationError, PathValidator

__all__ = ["PathValidationError", "PathValidator"]
