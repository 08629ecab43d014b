#!/usr/bin/env python3
"""
Object Storage Upload Throughput Benchmark

Run this script to measure upload speed for payloads from 1 MiB to
128 MiB, either as whole objects or as chunks of a resumable upload.

Usage:
    python run.py obj -b my-bucket             # Single-shot uploads
    python run.py mobj -b my-bucket            # Resumable chunked uploads
    python run.py mobj -b my-bucket --backend s3 -c custom.json
    python run.py obj -b my-bucket -q          # Result lines only
"""

import sys
from src.cli import main

if __name__ == "__main__":
    sys.exit(main())
