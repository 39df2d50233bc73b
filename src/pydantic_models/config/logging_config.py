from typing import Optional
from pydantic import BaseModel

class LoggingConfig(BaseModel):
    log_file: Optional[str] = None                  # ohne Datei nur stderr
    log_level: Optional[str] = "INFO"               # Defaultwert
