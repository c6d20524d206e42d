from pathlib import Path
from datetime import datetime
import json
from functools import lru_cache

from config import DEBUG_LOG_DIR

# Helper functions
_slugify = lambda name: name.strip('/').replace(' ', '_').replace('/', '_') or 'root'
_log_file_path = lambda run_dir, slug, suffix: run_dir / f"{slug}_{suffix}_{datetime.now().strftime('%H%M%S%f')}.json"

def _write_json(file_path, data):
    """Write JSON data to file"""
    with open(file_path, 'w', encoding='utf-8') as f:
        json.dump(data, f, indent=2)
    return file_path

@lru_cache(maxsize=1)
def get_logger():
    """Get or create debug logger (cached singleton)"""
    return DebugLogger(DEBUG_LOG_DIR)

class DebugLogger:
    """Writes one JSON record per compression / generation into a timestamped run directory."""

    def __init__(self, base_dir: str = "debug_logs"):
        self.base_dir = Path(base_dir)
        self.base_dir.mkdir(parents=True, exist_ok=True)

        # Create timestamped run directory
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        self.run_dir = self.base_dir / timestamp
        self.run_dir.mkdir(exist_ok=True)

    def log_compression(self, page_path: str, origin: str, stats=None):
        """Log a served .m8 payload and, when compressed on demand, its sizes."""
        data = {
            'page': page_path,
            'origin': origin,
            'timestamp': datetime.now().isoformat(),
        }
        if stats is not None:
            data.update({
                'original_size': stats.original_size,
                'compressed_size': stats.compressed_size,
                'savings_percent': stats.savings_percent,
            })
        log_file = _write_json(_log_file_path(self.run_dir, _slugify(page_path), 'compression'), data)
        print(f"[DEBUG] Compression logged to: {log_file}")
        return log_file

    def log_generation(self, report):
        """Log a self-contained generation report (GenerationReport)."""
        data = {'timestamp': datetime.now().isoformat(), **report.model_dump()}
        log_file = _write_json(_log_file_path(self.run_dir, _slugify(Path(report.output).name), 'generation'), data)
        print(f"[DEBUG] Generation logged to: {log_file}")
        return log_file
