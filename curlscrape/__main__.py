"""curlscrape command-line entry point"""

from curlscrape.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
