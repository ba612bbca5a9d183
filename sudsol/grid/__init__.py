# -*- coding: utf-8 -*-
"""
sudsol.grid パッケージ

盤面（グリッド）に関する処理をまとめたサブパッケージです。
- candidates.py : 候補ビットマスクの盤面 CandidateGrid
- parser.py     : テキスト / DataFrame から CandidateGrid への変換
"""
