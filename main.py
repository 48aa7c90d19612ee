from __future__ import annotations

import sys

from api import main

if __name__ == "__main__":
    # 引数が 1 つでもあればヘッドレス実行（例: `python main.py headless`）
    sys.exit(main())
