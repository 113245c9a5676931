"""Token cost estimation backed by litellm's model price map."""

import litellm


def estimate_cost_usd(model: str, tokens_in: int, tokens_out: int) -> float | None:
    """Return the USD cost of a token count, or None for models litellm cannot price."""
    try:
        prompt_cost, completion_cost = litellm.cost_per_token(
            model=model, prompt_tokens=tokens_in, completion_tokens=tokens_out
        )
    except Exception:
        # litellm raises a bare Exception for models missing from its price map.
        return None
    return prompt_cost + completion_cost
