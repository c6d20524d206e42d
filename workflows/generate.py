from pathlib import Path
from typing import Optional, Tuple

from config import DEBUG_LOGS_ENABLED
from models.reports import GenerationReport
from models.schemas import SelfContainedResult
from repositories import read_text_file, write_text_file
from tasks.self_contained import generate_self_contained, verify_self_contained
from utils.debug_logger import get_logger
from utils.fetcher import http_fetch, is_url


def load_source(location: str) -> str:
    """Read source HTML from a file path or an http(s) URL"""
    return http_fetch(location) if is_url(location) else read_text_file(location)


def run_generation(input_location: str, output_path: str, verify: bool = False,
                   report_path: Optional[str] = None) -> Tuple[SelfContainedResult, GenerationReport]:
    """
    Workflow: source HTML -> self-contained .m8 page on disk.

    Args:
        input_location: Source file path or URL
        output_path: Where to write the generated page
        verify: Re-read the embedded payload and compare markup with the source
        report_path: Optional JSON file for the size report

    Returns:
        (result, report); report.verified is None unless verify was requested

    Raises:
        ArtifactNotFoundError / ArtifactReadError: input or output I/O failed
        requests.RequestException: URL input could not be fetched
    """
    original_html = load_source(input_location)
    result = generate_self_contained(original_html)
    write_text_file(output_path, result.html)

    verified = verify_self_contained(original_html, result.html) if verify else None
    report = GenerationReport.from_result(input_location, str(output_path), result, verified)

    if report_path:
        write_text_file(report_path, report.model_dump_json(indent=2))
    if DEBUG_LOGS_ENABLED:
        get_logger().log_generation(report)
    return result, report


output_uri = lambda output_path: Path(output_path).resolve().as_uri()
