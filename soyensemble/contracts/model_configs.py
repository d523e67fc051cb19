from __future__ import annotations

from typing import Annotated, Any, ClassVar, Literal, Optional, Union

from pydantic import BaseModel, Field

from .choices import SVMGamma, SVMKernel, TreeCriterion, TreeSplitter


class LinearRegConfig(BaseModel):
    algo: Literal["linreg"] = "linreg"

    family: ClassVar[str] = "regression"

    fit_intercept: bool = True
    positive: bool = False


class DecisionTreeRegressorConfig(BaseModel):
    algo: Literal["tree"] = "tree"

    family: ClassVar[str] = "tree"

    criterion: TreeCriterion = "squared_error"
    splitter: TreeSplitter = "best"
    max_depth: Optional[int] = None
    # rpart-like defaults (minsplit=20, minbucket=round(20/3))
    min_samples_split: int = 20
    min_samples_leaf: int = 7
    ccp_alpha: float = 0.0


class SVRRegressorConfig(BaseModel):
    algo: Literal["svr"] = "svr"

    family: ClassVar[str] = "svm"

    kernel: SVMKernel = "rbf"
    C: float = 1.0
    epsilon: float = 0.1
    gamma: Union[SVMGamma, float] = "scale"
    degree: int = 3
    tol: float = 1e-3
    max_iter: int = -1


ModelConfig = Annotated[
    Union[LinearRegConfig, DecisionTreeRegressorConfig, SVRRegressorConfig],
    Field(discriminator="algo"),
]


def get_model_family(model_cfg: Any) -> str:
    cls = model_cfg.__class__
    return getattr(cls, "family", "other")
