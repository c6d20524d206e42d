import argparse
from config import SERVER_HOST, SERVER_PORT, CONTENT_ROOT
from services.http_server import create_server
from utils.logging import print_header


def main(argv=None):
    """Run the on-demand .m8 server."""

    parser = argparse.ArgumentParser(description='Serve HTML pages as .m8 payloads expanded in the browser')
    parser.add_argument('--host', default=SERVER_HOST, help=f'Bind address (default: {SERVER_HOST})')
    parser.add_argument('--port', type=int, default=SERVER_PORT, help=f'Port (default: {SERVER_PORT})')
    parser.add_argument('--root', default=str(CONTENT_ROOT), help='Directory with *.source.html files (default: current directory)')
    args = parser.parse_args(argv)

    server = create_server(args.root, args.host, args.port)
    host, port = server.server_address[:2]

    print_header('.m8 Server Running!', width=50)
    print(f"Server: http://{host}:{port}")
    print(f"Content root: {server.repository.root}")
    print("")
    print("How it works:")
    print('1. Create "page.source.html" with your HTML')
    print(f"2. Visit http://{host}:{port}/page.html")
    print("3. Server compresses to .m8 and sends minimal client")
    print("4. Client decompresses and displays the page")
    print("=" * 50)

    try:
        server.serve_forever()
    except KeyboardInterrupt:
        print("\nShutting down...")
    finally:
        server.server_close()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
