from schooldesk import create_app

# Expose a WSGI-compatible app object for production servers (e.g., gunicorn, waitress)
app = create_app()

import sys
import socket


def check_port(port):
    """Check if a port is available"""
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    result = sock.connect_ex(('127.0.0.1', port))
    sock.close()
    return result != 0


def find_available_port(start_port=8000, max_port=8100):
    """Find an available port starting from start_port"""
    for port in range(start_port, max_port):
        if check_port(port):
            return port
    return None


def print_startup_info(port):
    print("🚀 Starting SchoolDesk API")
    print("=" * 50)
    print(f"📍 Local URL: http://localhost:{port}/api")
    print("=" * 50)
    print("🛠️  Maintenance jobs:")
    print("  python seed.py              (reset grades and classes)")
    print("  python fix_class_grades.py  (repair class -> grade links)")
    print("=" * 50)
    print("⚠️  Press Ctrl+C to stop the server")
    print("=" * 50)


def main():
    """Main startup function for developer runs"""
    port = find_available_port()
    if not port:
        print("❌ No available ports found in range 8000-8100")
        return False

    print_startup_info(port)
    app.run(
        host='0.0.0.0',
        port=port,
        debug=True,
        use_reloader=False  # Disable reloader to prevent double startup
    )
    return True


if __name__ == '__main__':
    try:
        success = main()
        sys.exit(0 if success else 1)
    except KeyboardInterrupt:
        print("\n\n👋 SchoolDesk stopped by user")
        sys.exit(0)
    except Exception as e:
        print(f"\n❌ Unexpected error: {e}")
        sys.exit(1)
