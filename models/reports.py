from pydantic import BaseModel, Field
from typing import Optional

class GenerationReport(BaseModel):
    """Size summary of one self-contained generation run"""
    input: str
    output: str
    original_size: int = Field(..., ge=0, description="Source HTML size in UTF-8 bytes")
    compressed_size: int = Field(..., ge=0, description="Pure .m8 payload size in UTF-8 bytes")
    self_contained_size: int = Field(..., ge=0, description="Generated file size in UTF-8 bytes")
    savings_percent: float
    decompressor_overhead: int
    net_savings_percent: float
    verified: Optional[bool] = Field(None, description="Round-trip check result, None when not requested")

    @classmethod
    def from_result(cls, input_name: str, output_name: str, result, verified: Optional[bool] = None):
        return cls(
            input=input_name,
            output=output_name,
            original_size=result.stats.original_size,
            compressed_size=result.stats.compressed_size,
            self_contained_size=result.self_contained_size,
            savings_percent=result.stats.savings_percent,
            decompressor_overhead=result.decompressor_overhead,
            net_savings_percent=result.net_savings_percent,
            verified=verified,
        )
