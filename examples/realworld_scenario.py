"""End-to-end scenario demonstrating the transport API against a live org."""

from __future__ import annotations

import asyncio
import os

from force_transport import HttpError, RequestParams, TransportOptions, create_transport

INSTANCE_URL = os.getenv("LOCATION_BASE_URL", "https://login.salesforce.com")
ACCESS_TOKEN = os.getenv("FORCE_ACCESS_TOKEN", "")
API_VERSION = os.getenv("FORCE_API_VERSION", "v59.0")


def log_section(title: str) -> None:
    print("\n" + "=" * 80)
    print(title)
    print("=" * 80)


def auth_headers() -> dict[str, str]:
    if not ACCESS_TOKEN:
        return {}
    return {"Authorization": f"Bearer {ACCESS_TOKEN}"}


async def main() -> None:
    options = TransportOptions.from_env(base_url=INSTANCE_URL)
    transport = create_transport(options)
    print(f"Using {transport.kind} transport against {INSTANCE_URL}")

    log_section("Step 1: List API versions")
    promise = transport.http_request(RequestParams("GET", "/services/data", headers=auth_headers()))
    print(f"→ In-flight request task: {promise.stream()!r}")
    try:
        result = await promise
    except HttpError as exc:
        print(f"→ Request failed with {exc.status_code}: {exc}")
        return
    for version in result.body[-3:]:
        print(f"  {version['version']}: {version['url']}")

    log_section("Step 2: Describe limits with an error-first callback")
    done = asyncio.get_running_loop().create_future()

    def on_limits(err, res) -> None:
        if err is not None:
            print(f"→ Limits request failed: {err}")
        else:
            print(f"→ Limits status {res.status_code}, {len(res.body)} entries")
        done.set_result(None)

    transport.http_request(
        RequestParams("GET", f"/services/data/{API_VERSION}/limits", headers=auth_headers()),
        on_limits,
    )
    await done


if __name__ == "__main__":
    asyncio.run(main())
