"""
write_load.py — simple async load script to create short links

Usage:
  python write_load.py --base http://127.0.0.1:8000 --count 2000 --concurrency 100 --out links_created.jsonl
  python write_load.py --count 50 --custom-code race-me   # all requests fight over one code
"""
import argparse
import asyncio
import json
import random
import string
import time
from collections import Counter
from datetime import datetime, timezone

import httpx

def _now_iso():
    return datetime.now(timezone.utc).isoformat()

def _rand_host():
    tlds = ["com", "net", "org", "io", "ai"]
    names = ["example", "sample", "demo", "test", "alpha", "beta", "gamma"]
    return f"{random.choice(names)}.{random.choice(tlds)}"

def _rand_path(n=6):
    alphabet = string.ascii_letters + string.digits
    return "".join(random.choice(alphabet) for _ in range(n))

async def _create_one(client: httpx.AsyncClient, base: str, out_file, idx: int, custom_code=None):
    url = f"https://{_rand_host()}/{_rand_path(8)}?q={idx}"
    payload = {"url": url}
    if custom_code:
        payload["customCode"] = custom_code
    try:
        r = await client.post(f"{base}/links", json=payload, timeout=10)
    except httpx.HTTPError:
        return "transport_error"
    try:
        data = r.json()
    except ValueError:
        return f"http_{r.status_code}"
    if data.get("success"):
        if out_file:
            out_file.write(json.dumps({"shortCode": data["shortCode"], "url": url}) + "\n")
        return "ok"
    return f"http_{r.status_code}"

async def main():
    parser = argparse.ArgumentParser()
    parser.add_argument("--base", default="http://127.0.0.1:8000")
    parser.add_argument("--count", type=int, default=2000)
    parser.add_argument("--concurrency", type=int, default=100)
    parser.add_argument("--user", default="link_demo")
    parser.add_argument("--password", default="link_demo")
    parser.add_argument("--custom-code", default=None, help="send the same custom code with every request")
    parser.add_argument("--out", default="links_created.jsonl")
    args = parser.parse_args()

    start_iso = _now_iso()
    t0 = time.perf_counter()
    outcomes = Counter()

    limit = httpx.Limits(max_connections=args.concurrency, max_keepalive_connections=args.concurrency)
    with open(args.out, "w", encoding="utf-8") as out_f:
        async with httpx.AsyncClient(limits=limit, auth=(args.user, args.password)) as client:
            sem = asyncio.Semaphore(args.concurrency)

            async def _task(i):
                async with sem:
                    outcomes[await _create_one(client, args.base, out_f, i, args.custom_code)] += 1

            await asyncio.gather(*(_task(i) for i in range(args.count)))

    dt = time.perf_counter() - t0
    print(f"START: {start_iso}")
    print(f"END:   {_now_iso()}")
    print(f"TOTAL: {dt:.3f} s")
    print(f"OPS:   writes={args.count}, " + ", ".join(f"{k}={v}" for k, v in sorted(outcomes.items())))
    if dt > 0:
        print(f"TPS:   {outcomes['ok']/dt:.1f} req/s")

if __name__ == "__main__":
    asyncio.run(main())
