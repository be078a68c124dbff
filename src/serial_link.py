import logging
import time
from typing import Optional

import serial

log = logging.getLogger(__name__)


class WasherLink:
    """Sends the computed wash time to the washer's controller board, one line per update."""

    def __init__(self, port: str, baud: int = 115200, timeout: float = 0.01):
        self.port = port
        self.baud = baud
        self.timeout = timeout
        self.ser: Optional[serial.Serial] = None

    def __enter__(self) -> "WasherLink":
        self.open()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    @property
    def is_open(self) -> bool:
        return self.ser is not None

    def open(self) -> None:
        if self.ser is None:
            self.ser = serial.Serial(self.port, self.baud, timeout=self.timeout)
            log.info("Opened %s at %d baud", self.port, self.baud)

    def close(self) -> None:
        if self.ser:
            self.ser.close()
            self.ser = None

    def send_wash_time(self, minutes: float) -> None:
        """Frame: T,<minutes>\\n with two decimals."""
        if not self.ser:
            raise RuntimeError("Washer link not opened")
        frame = f"T,{minutes:.2f}\n".encode("ascii")
        log.debug("-> %r", frame)
        self.ser.write(frame)
        # adapters drop bytes on back-to-back frames
        time.sleep(0.0005)
