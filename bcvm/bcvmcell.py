#!/usr/bin/env python3

from dataclasses import dataclass
from typing import Optional

@dataclass
class Cell:
    identifier: Optional[str]
    value: int

    @property
    def is_anonymous(self) -> bool:
        return self.identifier is None
