from pydantic import BaseModel

class LoggingConfig(BaseModel):
    level: str = "INFO"
    format: str = "%(asctime)s %(levelname)s %(name)s: %(message)s"
    decode_warning_interval_s: float = 5.0
