from datetime import datetime
from models.enums import PayloadOrigin, ResourceKind
from models.schemas import CompressedPage


class RequestObserver:
    """Base observer for server request events"""

    def on_request(self, method: str, raw_path: str, path: str):
        pass

    def on_routed(self, kind: ResourceKind, path: str):
        pass

    def on_payload(self, page: CompressedPage):
        pass

    def on_not_found(self, searched: str):
        pass

    def on_error(self, path: str, message: str):
        pass


class ConsoleObserver(RequestObserver):
    """Console output observer: one block of lines per request"""

    def on_request(self, method: str, raw_path: str, path: str):
        print(f"\n{datetime.now().isoformat()} - {method} {raw_path}")
        print(f"  Parsed path: {path}")

    def on_routed(self, kind: ResourceKind, path: str):
        if kind == ResourceKind.VIEWER:
            print("  → Serving minimal .m8 client")
        elif kind == ResourceKind.COMPRESSED:
            print(f"  → .m8 file requested, looking for: {path}")
        else:
            print(f"  → Static file: {path}")

    def on_payload(self, page: CompressedPage):
        if page.origin == PayloadOrigin.CACHED:
            print(f"  ✓ Found existing .m8 file ({len(page.body)} chars)")
            return
        stats = page.stats
        print(f"  ✓ Compressed: {stats.original_size}B → {stats.compressed_size}B ({stats.savings_label} saved)")

    def on_not_found(self, searched: str):
        print(f"  ✗ Not found! Expected location: {searched}")

    def on_error(self, path: str, message: str):
        print(f"  ✗ Error reading {path}: {message}")


class SilentObserver(RequestObserver):
    """No-op observer for silent execution"""
    pass
