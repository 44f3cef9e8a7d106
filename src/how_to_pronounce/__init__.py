"""How To Pronounce - Word Pronunciation Practice.

A terminal tool for practising single words:
1. Enter a word and say it aloud
2. Get a 0-10 similarity score and a tip for improving
"""

__version__ = "0.1.0"
