"""Shopping-cart discount engine with brand, category, voucher and bank offers."""

__version__ = "0.1.0"
__all__ = ["__version__"]