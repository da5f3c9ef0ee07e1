from mcapi.adapters import build_adapters
import json
import sys

adapters = build_adapters(timeout=5)
for address in sys.argv[1:] or ["localhost"]:
    for kind, adapter in adapters.items():
        print(address, kind)
        try:
            res = adapter.fetch(address)
        except Exception as e:
            res = {"error": f"{type(e).__name__}: {e}"}
        print(json.dumps(res, ensure_ascii=False, indent=2))
        print('-' * 40)
