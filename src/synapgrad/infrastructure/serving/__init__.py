from ._service import PredictionService

__all__ = [
    PredictionService.__name__,
]
