# -*- coding: utf-8 -*-
"""解いた盤面の検証まわり。"""
