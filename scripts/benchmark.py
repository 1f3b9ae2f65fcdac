#!/usr/bin/env python3
"""
Simulate edge nodes revalidating one asset against the origin and report the
cache hit ratio.

Example:
    python scripts/benchmark.py --server http://127.0.0.1:8000 --requests 100
"""

from __future__ import annotations

import argparse
import json
import sys
import time
import urllib.error
import urllib.request
import uuid
from typing import Any, Optional

PASS_RATIO = 95.0


def http_request(url: str, method: str = "GET", headers: Optional[dict[str, str]] = None,
                 data: Optional[bytes] = None, timeout: int = 30) -> tuple[int, bytes]:
    req = urllib.request.Request(url, data=data, headers=headers or {}, method=method)
    try:
        with urllib.request.urlopen(req, timeout=timeout) as resp:
            return resp.status, resp.read()
    except urllib.error.HTTPError as exc:
        return exc.code, exc.read()


def http_post_multipart(url: str,
                        fields: dict[str, str],
                        files: dict[str, tuple[str, bytes, str]],
                        timeout: int = 120) -> tuple[int, bytes]:
    boundary = "----AssetBoundary" + uuid.uuid4().hex
    body = bytearray()

    def add_line(line: str) -> None:
        body.extend(line.encode("utf-8"))

    for name, value in fields.items():
        add_line(f"--{boundary}\r\n")
        add_line(f'Content-Disposition: form-data; name="{name}"\r\n\r\n')
        add_line(f"{value}\r\n")

    for name, (filename, content, content_type) in files.items():
        add_line(f"--{boundary}\r\n")
        add_line(
            f'Content-Disposition: form-data; name="{name}"; filename="{filename}"\r\n')
        add_line(f"Content-Type: {content_type}\r\n\r\n")
        body.extend(content)
        body.extend(b"\r\n")

    add_line(f"--{boundary}--\r\n")

    headers = {"Content-Type": f"multipart/form-data; boundary={boundary}"}
    return http_request(url, method="POST", headers=headers, data=bytes(body), timeout=timeout)


def upload_asset(server: str) -> dict[str, Any]:
    url = server.rstrip("/") + "/assets/upload"
    print(f"[api] uploading benchmark asset to {url}")
    status, body = http_post_multipart(
        url,
        {},
        {"file": ("bench.txt", b"Benchmark Data", "text/plain")},
    )
    if status != 201:
        raise SystemExit(f"upload failed: {status} {body.decode(errors='ignore')}")
    return json.loads(body.decode("utf-8"))


def run_benchmark(server: str, total_requests: int) -> float:
    asset = upload_asset(server)
    url = server.rstrip("/") + f"/assets/{asset['id']}/download"

    hits = 0
    misses = 0
    elapsed = 0.0
    print(f"[bench] simulating {total_requests} requests from edge nodes")
    for i in range(total_requests):
        # first request is a cold fetch, the rest revalidate
        headers = {"If-None-Match": asset["etag"]} if i > 0 else {}
        start = time.perf_counter()
        status, _ = http_request(url, headers=headers)
        elapsed += time.perf_counter() - start
        if status == 304:
            hits += 1
        elif status == 200:
            misses += 1

    ratio = hits / total_requests * 100
    print(f"Total requests:                 {total_requests}")
    print(f"Cache misses (origin fetches):  {misses}")
    print(f"Cache hits (304 Not Modified):  {hits}")
    print(f"Avg response time:              {elapsed / total_requests * 1000:.2f}ms")
    print(f"Cache hit ratio:                {ratio:.1f}%")
    return ratio


def main() -> None:
    parser = argparse.ArgumentParser(description="Edge cache hit ratio benchmark")
    parser.add_argument("--server", default="http://127.0.0.1:8000", help="Origin server base URL")
    parser.add_argument("--requests", type=int, default=100, help="Number of download requests")
    args = parser.parse_args()

    if args.requests < 1:
        raise SystemExit("--requests must be at least 1")

    ratio = run_benchmark(args.server, args.requests)
    if ratio >= PASS_RATIO:
        print(f"[done] PASS: cache hit ratio is at least {PASS_RATIO}%")
    else:
        raise SystemExit(f"[done] FAIL: cache hit ratio below {PASS_RATIO}%")


if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:
        sys.exit("aborted by user")
