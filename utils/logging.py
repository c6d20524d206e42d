"""Console formatting helpers"""

def print_header(title: str, width: int = 60, char: str = '='):
    """Print a title framed by separator lines"""
    print(char * width)
    print(title)
    print(char * width)


format_bytes = lambda n: f"{n:,} bytes"
