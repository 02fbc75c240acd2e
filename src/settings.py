"""
Паспорт пайплайна документации: как он называется в CI и что отслеживает.
"""

NAME = "📚 Docs"
SHORTNAME = "docs"
DESCRIPTION = "Docs Build/Deploy"
BRANCHES = "master"
ALLOW_PRS = True

LOGO = r"""
     _                        _
  __| | ___   ___ ___ _ __ (_)_ __   ___
 / _` |/ _ \ / __/ __| '_ \| | '_ \ / _ \
| (_| | (_) | (__\__ \ |_) | | |_) |  __/
 \__,_|\___/ \___|___/ .__/|_| .__/ \___|
                     |_|     |_|
"""
