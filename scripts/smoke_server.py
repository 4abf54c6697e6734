import json
import sys
import urllib.parse
import urllib.request

BASE_URL = "http://127.0.0.1:5000/api/rows"


def smoke_test():
    # 1. Plain JSON read
    try:
        with urllib.request.urlopen(BASE_URL) as response:
            payload = json.loads(response.read().decode('utf-8'))
    except Exception as e:
        print(f"Request failed: {e}")
        sys.exit(1)

    if payload.get('success'):
        print(f"Success! {payload['meta']['rowCount']} rows fetched at {payload['meta']['fetchedAt']}")
        print(f"Status column: {payload['debug']['installmentStatusColumn']}")
    else:
        print(f"API returned error: {payload.get('error')}")

    # 2. JSONP framing
    with urllib.request.urlopen(f"{BASE_URL}?callback=handleRows") as response:
        body = response.read().decode('utf-8')
        if body.startswith("handleRows(") and body.endswith(")"):
            print("JSONP framing OK.")
        else:
            print("WARNING: JSONP body not wrapped in callback.")

    # 3. Purge cache
    data = urllib.parse.urlencode({'action': 'purgeCache'}).encode('utf-8')
    with urllib.request.urlopen(urllib.request.Request(BASE_URL, data=data)) as response:
        print(f"Purge: {json.loads(response.read().decode('utf-8'))}")


if __name__ == "__main__":
    smoke_test()
