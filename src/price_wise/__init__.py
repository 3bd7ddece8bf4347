"""price_wise: preços de mercado via StatCan WDS."""

__version__ = "0.1.0"
