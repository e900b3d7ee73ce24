from dataclasses import dataclass

import numpy as np


@dataclass(slots=True)
class LiveFrame:
    data: np.ndarray
    frame_number: int
    timestamp: float
    color_format: str = "BGR"

    @property
    def size(self) -> tuple[int, int]:
        return (int(self.data.shape[1]), int(self.data.shape[0]))

    def copy(self) -> "LiveFrame":
        return LiveFrame(
            data=self.data.copy(),
            frame_number=self.frame_number,
            timestamp=self.timestamp,
            color_format=self.color_format,
        )
