import logging
import os
import sys
import tempfile
from pathlib import Path

import pytest

# Ensure repo root on sys.path for imports from anywhere in tests tree.
ROOT = Path(__file__).resolve().parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

# server.api_server configures file logging on import
os.environ.setdefault("ROOT_DIR", tempfile.mkdtemp(prefix="member-search-bridge-"))

from shared.helper.HelperConfig import HelperConfig  # noqa: E402
from shared.models.config import SearchIndexConfig  # noqa: E402


@pytest.fixture
def helper_config() -> HelperConfig:
    return HelperConfig(logger=logging.getLogger("member_search_bridge.tests"))


@pytest.fixture
def index_config() -> SearchIndexConfig:
    return SearchIndexConfig(
        member_profile_index="members-profile",
        member_skills_index="members-skills",
        member_stats_index="members-stats",
        member_trait_index="members-traits",
        scroll_lifetime="90s",
        scroll_batch_size=10,
        suggestion_size=25,
    )
