"""deckfilter - 多列内容流的过滤、标签与排序引擎。"""

__version__ = "0.1.0"
