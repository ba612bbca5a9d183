# -*- coding: utf-8 -*-
"""
sudsol.csp パッケージ

制約充足（CSP）として数独を解く処理をまとめています。

主に以下の役割を持つモジュールから構成されています。
- propagation.py : 制約伝播（行・列・ブロックからの候補の消去）
- completion.py  : 値が1つだけ欠けたブロックの穴埋め
- search.py      : MRV による分岐とバックトラック（SudokuSolver）
"""
