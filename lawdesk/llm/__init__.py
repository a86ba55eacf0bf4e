from lawdesk.llm.factory import (
    get_chat_llm,
    clear_llm_cache,
    require_api_key,
)
