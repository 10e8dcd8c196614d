#!/usr/bin/env python3
"""Smoke check for a running chat relay."""

import os
import sys

import httpx


BASE_URL = os.getenv("RELAY_URL") or "http://127.0.0.1:8001/"


def check_method_not_allowed() -> bool:
    print("=" * 60)
    print(f"GET {BASE_URL} (expect 405)")
    print("=" * 60)
    response = httpx.get(BASE_URL, timeout=10.0)
    print(f"Status: {response.status_code} Body: {response.text}")
    return response.status_code == 405


def check_empty_messages() -> bool:
    print("\n" + "=" * 60)
    print(f"POST {BASE_URL} with empty messages (expect 400)")
    print("=" * 60)
    response = httpx.post(BASE_URL, json={"messages": []}, timeout=10.0)
    print(f"Status: {response.status_code} Body: {response.text}")
    return response.status_code == 400


def check_chat(web_search: bool) -> bool:
    print("\n" + "=" * 60)
    print(f"POST {BASE_URL} webSearch={web_search}")
    print("=" * 60)

    payload = {
        "messages": [
            {"role": "system", "content": "You are a friendly beauty advisor."},
            {"role": "user", "content": "Suggest a simple morning routine with a cleanser and sunscreen."},
        ],
        "webSearch": web_search,
    }

    try:
        response = httpx.post(BASE_URL, json=payload, timeout=60.0)
        response.raise_for_status()
        data = response.json()
        content = data["choices"][0]["message"]["content"]
        print(f"Success! CORS header: {response.headers.get('access-control-allow-origin')}")
        print(content)
        return True
    except httpx.HTTPStatusError as e:
        print(f"HTTP Error: {e.response.status_code}")
        print(f"Response: {e.response.text}")
        return False
    except (httpx.HTTPError, KeyError, IndexError, ValueError) as e:
        print(f"Error: {e}")
        return False


def main() -> None:
    try:
        httpx.get(BASE_URL.rstrip("/") + "/health", timeout=5.0)
    except httpx.HTTPError:
        print("Relay is not running!")
        print("   Please start it with: uvicorn routine_builder.main:app --reload --port 8001")
        sys.exit(1)

    results = [
        check_method_not_allowed(),
        check_empty_messages(),
        check_chat(web_search=False),
        check_chat(web_search=True),
    ]

    print("\n" + "=" * 60)
    print(f"{sum(results)}/{len(results)} checks passed")
    print("=" * 60 + "\n")
    sys.exit(0 if all(results) else 1)


if __name__ == "__main__":
    main()
