from dataclasses import dataclass
from typing import Dict, Optional

from models.enums import PayloadOrigin


_percent_saved = lambda before, after: round((before - after) / before * 100, 1) if before else 0.0


@dataclass(frozen=True)
class CompressionStats:
    original_size: int
    compressed_size: int

    @property
    def savings_percent(self) -> float:
        return _percent_saved(self.original_size, self.compressed_size)

    @property
    def savings_label(self) -> str:
        return f"{self.savings_percent:.1f}%"


@dataclass(frozen=True)
class SelfContainedResult:
    html: str
    stats: CompressionStats
    self_contained_size: int

    @property
    def decompressor_overhead(self) -> int:
        """Bytes the embedded decompressor and page shell add on top of the payload"""
        return self.self_contained_size - self.stats.compressed_size

    @property
    def net_savings_percent(self) -> float:
        return _percent_saved(self.stats.original_size, self.self_contained_size)


@dataclass
class CompressedPage:
    """A .m8 payload ready to be served, plus where it came from"""
    path: str
    body: str
    origin: PayloadOrigin
    stats: Optional[CompressionStats] = None

    def headers(self) -> Dict[str, str]:
        """Response metadata; size fields only when compressed on demand."""
        headers = {'X-Content-Format': 'm8'}
        if self.stats is not None:
            headers.update({
                'X-Original-Size': str(self.stats.original_size),
                'X-Compressed-Size': str(self.stats.compressed_size),
                'X-Savings': self.stats.savings_label,
            })
        return headers
