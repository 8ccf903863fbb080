from pydantic import BaseModel

from shared.helper.HelperConfig import HelperConfig


class EnvConfig(BaseModel):
    """
    Represents a single configuration parameter a client reads from the environment.

    Attributes:
        env_key (str): The raw key of the environment variable, without the client prefix.
        val_type (str): The expected type of the value. Supported types are "string", "number", "bool" and "list".
        default (str | int | float | bool | list | None): Default if the variable is not set. None marks the variable as required.
    """

    env_key: str
    val_type: str
    default: str | int | float | bool | list | None = None


class SearchIndexConfig(BaseModel):
    """
    Explicit search backend parameters handed to the query builder at construction time.

    Attributes:
        member_profile_index:  Index holding member profiles (also serves handle suggestions).
        member_skills_index:   Index holding aggregated member skills.
        member_stats_index:    Index holding member statistics.
        member_trait_index:    Index holding member traits.
        scroll_lifetime:       Cursor time-to-live sent with every scroll request (e.g. "90s").
        scroll_batch_size:     Page size used when draining a query with the scroll API.
        suggestion_size:       Upper bound of completion candidates requested per typeahead lookup.
    """

    member_profile_index: str
    member_skills_index: str
    member_stats_index: str
    member_trait_index: str
    scroll_lifetime: str = "90s"
    scroll_batch_size: int = 10000
    suggestion_size: int = 100

    @classmethod
    def from_helper_config(cls, helper_config: HelperConfig) -> "SearchIndexConfig":
        """Reads the SEARCH_INDEX_* and SEARCH_SCROLL_* variables.

        Raises:
            ValueError: If one of the index names is not set.
        """
        return cls(
            member_profile_index=helper_config.get_string_val("SEARCH_INDEX_MEMBER_PROFILE"),
            member_skills_index=helper_config.get_string_val("SEARCH_INDEX_MEMBER_SKILLS"),
            member_stats_index=helper_config.get_string_val("SEARCH_INDEX_MEMBER_STATS"),
            member_trait_index=helper_config.get_string_val("SEARCH_INDEX_MEMBER_TRAIT"),
            scroll_lifetime=helper_config.get_string_val("SEARCH_SCROLL_LIFETIME", default="90s"),
            scroll_batch_size=int(helper_config.get_number_val("SEARCH_SCROLL_BATCH_SIZE", default=10000)),
            suggestion_size=int(helper_config.get_number_val("SEARCH_SUGGESTION_SIZE", default=100)),
        )
