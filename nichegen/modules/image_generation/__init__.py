from .client import ImageGenerationClient, ImageGenerationError

__all__ = ['ImageGenerationClient', 'ImageGenerationError']
