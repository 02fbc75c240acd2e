import os

import settings

"""
Настройки пайплайна документации.

Всё, что зависит от инфраструктуры (домены, кластер, registry, пути в репозитории),
можно переопределить переменной окружения с префиксом DOCSPIPE_.
"""

MAINLINE_BRANCH = os.getenv("DOCSPIPE_MAINLINE_BRANCH", settings.BRANCHES.split()[0])
# Ветки, из которых разрешено выпускать релиз (через пробел, как в Buildkite)
TRACKED_BRANCHES = os.getenv("DOCSPIPE_BRANCHES", settings.BRANCHES).split()

IMAGE_REPOSITORY = os.getenv(
    "DOCSPIPE_IMAGE_REPOSITORY", "gcr.io/exponentjs/exponent-docs-v2"
)

PRODUCTION_HOST = os.getenv("DOCSPIPE_PRODUCTION_HOST", "docs.expo.io")
STAGING_HOST = os.getenv("DOCSPIPE_STAGING_HOST", "staging.docs.expo.io")
PREVIEW_DOMAIN = os.getenv("DOCSPIPE_PREVIEW_DOMAIN", "pr.exp.host")

PRODUCTION_REPLICAS = 2
DEFAULT_REPLICAS = 1

# Helm
CLUSTER_NAME = os.getenv("DOCSPIPE_CLUSTER_NAME", "exp-central")
CHART_PATH = os.getenv("DOCSPIPE_CHART_PATH", "./deploy/charts/docs")

# Сборка образа
ROCKERFILE = os.getenv("DOCSPIPE_ROCKERFILE", "./deploy/docker/deploy.Rockerfile")
BUILD_CONTEXT = os.getenv("DOCSPIPE_BUILD_CONTEXT", ".")
PACKAGE_JSON = os.getenv("DOCSPIPE_PACKAGE_JSON", "./package.json")
STALE_CACHE_DIRS = os.getenv(
    "DOCSPIPE_STALE_CACHE_DIRS",
    "./gatsby/.intermediate-representation:./gatsby/public",
).split(":")
BUILDER_QUEUE = os.getenv("DOCSPIPE_BUILDER_QUEUE", "builder")

# Релизы
RELEASE_TAG_PREFIX = os.getenv("DOCSPIPE_RELEASE_TAG_PREFIX", "docs/release-")
GIT_REMOTE = os.getenv("DOCSPIPE_GIT_REMOTE", "origin")
VERSION_HASH_LENGTH = 12

# Статусы деплоя в GitHub
PROJECT_NAME = settings.SHORTNAME
DEPLOYMENT_TYPE = "k8s"
GITHUB_API_URL = os.getenv("DOCSPIPE_GITHUB_API_URL", "https://api.github.com")
GITHUB_REPOSITORY = os.getenv("DOCSPIPE_GITHUB_REPOSITORY", "expo/expo")
GITHUB_TOKEN = os.getenv("GITHUB_TOKEN", "")
HTTP_TIMEOUT = float(os.getenv("DOCSPIPE_HTTP_TIMEOUT", "30"))

SEARCH_INDEX_COMMAND = os.getenv(
    "DOCSPIPE_SEARCH_INDEX_COMMAND", "yarn run update-search-index --"
).split()


def current_commit() -> str:
    """
    Коммит, на котором запущен прогон. Читается при каждом вызове, а не при импорте,
    потому что агент CI выставляет переменную перед запуском шага.
    """
    return os.getenv("CURRENT_COMMIT_SHA") or os.getenv("BUILDKITE_COMMIT", "")
