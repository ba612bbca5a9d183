# -*- coding: utf-8 -*-
"""
コマンドラインから数独を解くためのエントリポイントです。

使い方:

    sudsol puzzle.txt
    sudsol -v puzzle.txt      # 探索の経過も表示する
    python -m sudsol puzzle.txt

終了コード
----------
- 0 : 盤面を読み込めて、結果（解けた / 解けなかった）を表示できた
- 1 : 引数の誤り、読み込みエラー、スタック上限超過、解なし
"""

from __future__ import annotations

import sys
from typing import List, Optional

from . import solve_file
from .errors import CapacityExceeded, FormatError
from .logging_utils import get_logger, set_verbose
from .postprocess.render_result import render_report
from .types import STATUS_UNSOLVABLE

logger = get_logger()

USAGE = "usage: sudsol [-v] puzzle.txt"

VERBOSE_FLAGS = ("-v", "--verbose")


def main(argv: Optional[List[str]] = None) -> int:
    args = sys.argv[1:] if argv is None else argv
    verbose = any(a in VERBOSE_FLAGS for a in args)
    args = [a for a in args if a not in VERBOSE_FLAGS]
    if len(args) != 1:
        print(USAGE, file=sys.stderr)
        return 1

    # -v のときだけ、探索の1手ごとのログ（DEBUG）を出す
    set_verbose(verbose)

    path = args[0]
    try:
        result = solve_file(path)
    except FormatError as e:
        logger.error("Invalid puzzle file %s: %s", path, e)
        return 1
    except OSError as e:
        logger.error("Can't open file %s: %s", path, e)
        return 1
    except CapacityExceeded as e:
        logger.error("%s", e)
        return 1

    print(render_report(result))

    if result.status == STATUS_UNSOLVABLE:
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
