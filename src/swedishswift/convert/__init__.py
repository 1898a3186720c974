from .converter import ConversionResult, SwedishDetailsConverter, convert
from .validators import valid_bank_code, valid_length

__all__ = ["ConversionResult", "SwedishDetailsConverter", "convert", "valid_bank_code", "valid_length"]
