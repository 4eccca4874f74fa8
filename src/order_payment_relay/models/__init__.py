from .env_cfg import Credentials, EnvCfg
from .orders import OrderResult

__all__ = ["Credentials", "EnvCfg", "OrderResult"]
