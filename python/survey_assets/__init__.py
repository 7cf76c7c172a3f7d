"""
HTML шаблоны и статика веб-анкеты (ставятся вместе с пакетом)
"""

from pathlib import Path

ASSETS_DIR = Path(__file__).parent
TEMPLATES_DIR = ASSETS_DIR / 'templates'
STATIC_DIR = ASSETS_DIR / 'static'
