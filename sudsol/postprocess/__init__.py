# -*- coding: utf-8 -*-
"""探索結果を表示用の文字列や dict に変換するサブパッケージです。"""
