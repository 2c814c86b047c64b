from .blueprints import api_bp
from .errors import register_error_handlers

__all__ = ['api_bp', 'register_error_handlers']
