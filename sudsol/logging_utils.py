# -*- coding: utf-8 -*-
"""
ログ出力の設定を行うモジュールです。

初学者向けポイント:
- 「ログ」とは、プログラムの実行状況を記録するメッセージのことです。
- 盤面の表示（解答）は標準出力に print しますが、
  探索の経過やエラーはログとして標準エラー出力に出します。
"""

from __future__ import annotations

import logging

# sudsol パッケージ共通で使うロガー名
LOGGER_NAME = "sudsol"


def get_logger() -> logging.Logger:
    """
    sudsol 全体で共通して使う logger を返します。

    すでに handler（出力先）が設定されていない場合は、
    標準エラー出力に INFO レベルのログを表示するように設定します。
    """
    logger = logging.getLogger(LOGGER_NAME)

    # まだハンドラが設定されていなければ、簡単な設定を行う
    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter(
            "%(asctime)s [%(levelname)s] [%(name)s] %(message)s"
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        logger.setLevel(logging.INFO)

    return logger


def set_verbose(enabled: bool = True) -> None:
    """探索の1手ごとのログ（DEBUG）を出すかどうかを切り替えます。"""
    get_logger().setLevel(logging.DEBUG if enabled else logging.INFO)
