"""Request schemas for the JSON API.

Pydantic handles structural validation (types, required fields). Shape,
payoff and rule checks stay in the engine so the API and the Python entry
point reject exactly the same inputs.

The model is strict: JSON booleans and numeric strings are not coerced to
floats, matching the engine's refusal of bool payoffs and lambdas.
"""

from pydantic import BaseModel, ConfigDict, Field


class EvaluationRequest(BaseModel):
    """Body of POST /api/evaluate.

    Example:
        {"matrix": [[50, 10], [30, 40]], "rule": "hurwicz", "lambda": 0.7}
    """

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True, strict=True)

    matrix: list[list[float]] = Field(description="Payoff rows, one per alternative")
    rule: str = Field(description="maximin, maximax, laplace, hurwicz or savage")
    lam: float | None = Field(default=None, alias="lambda", description="Hurwicz lambda (default 0.5)")
