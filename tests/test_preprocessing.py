import numpy as np
import pandas as pd
import pytest

from soyensemble.components.data import Dataset
from soyensemble.components.preprocessing import VIEW_FAMILIES, build_views, clean_observations
from soyensemble.components.splitters import holdout_split
from soyensemble.contracts import ViewsModel


def _views(frame, seed=0, **cfg):
    base = clean_observations(frame)
    split = holdout_split(Dataset.from_frame(base, target="GY"), test_frac=0.3, rng=seed)
    return base, split, build_views(base, split, ViewsModel(**cfg))


def test_cleaning_drops_incomplete_rows_and_keeps_row_ids(soybean_frame):
    raw = soybean_frame.copy()
    raw.loc[3, "GY"] = np.nan
    raw["PH"] = raw["PH"].astype(object)
    raw.loc[10, "PH"] = "n/a"
    raw["Cultivar"] = raw["Cultivar"].astype(str) + "  "

    with pytest.warns(UserWarning, match="Dropping 2"):
        base = clean_observations(raw)

    assert len(base) == 318
    assert 3 not in base.index and 10 not in base.index
    assert base.index[3] == 4
    assert base.index.name == "row_id"
    assert not base["Cultivar"].str.endswith(" ").any()
    assert base["PH"].dtype == float


def test_cleaning_normalises_numeric_labels(soybean_frame):
    raw = soybean_frame.copy()
    raw["Season"] = raw["Season"].astype(float)
    base = clean_observations(raw)
    assert set(base["Season"]) == {"1", "2"}


def test_cleaning_uses_id_column(soybean_frame):
    raw = soybean_frame.copy()
    raw["obs"] = [f"o{i}" for i in range(len(raw))]
    base = clean_observations(raw, id_column="obs")
    assert base.index[0] == "o0"

    raw.loc[1, "obs"] = "o0"
    with pytest.raises(ValueError, match="duplicate"):
        clean_observations(raw, id_column="obs")


def test_cleaning_requires_columns(soybean_frame):
    with pytest.raises(ValueError, match="missing column"):
        clean_observations(soybean_frame.drop(columns=["MHG"]))


def test_all_views_share_row_ids_and_order(soybean_frame):
    _, split, views = _views(soybean_frame)
    assert views.tree_train.n_rows == 224 and views.tree_test.n_rows == 96
    for family in VIEW_FAMILIES:
        assert np.array_equal(views.train(family).row_ids, split.train.row_ids)
        assert np.array_equal(views.test(family).row_ids, split.test.row_ids)
        assert views.train(family).schema == views.test(family).schema
        assert np.array_equal(views.test(family).target_array(), split.test.target_array())


def test_view_schemas(soybean_frame):
    _, _, views = _views(soybean_frame)
    tree_cols = views.tree_train.feature_names
    assert tree_cols[:7] == ("PH", "IFP", "NLP", "NGP", "NGL", "NS", "MHG")
    assert any(c.startswith("Season_") for c in tree_cols)
    assert any(c.startswith("Repetition_") for c in tree_cols)

    reg_cols = views.regression_train.feature_names
    assert reg_cols[0] == "PC1"
    assert "PH" not in reg_cols
    assert 1 <= views.info["regression"]["pca_components"] <= 7
    assert views.info["regression"]["pca_explained_variance"] >= 0.95

    assert "Cultivar_te" in views.svm_train.feature_names


def test_transforms_are_fit_on_training_rows_only(soybean_frame):
    base, split, views = _views(soybean_frame)
    mm_train = views.svm_train.features["PH"]
    assert mm_train.min() == pytest.approx(0.0)
    assert mm_train.max() == pytest.approx(1.0)

    train_rows = base.loc[split.train.row_ids]
    expected = train_rows.groupby("Cultivar")["GY"].mean()
    rid = split.test.row_ids[0]
    cultivar = base.loc[rid, "Cultivar"]
    if cultivar in expected.index:
        assert views.svm_test.features.loc[rid, "Cultivar_te"] == pytest.approx(expected[cultivar])


def test_unseen_cultivar_gets_global_training_mean(soybean_frame):
    frame = soybean_frame.copy()
    frame.loc[frame.index[-1], "Cultivar"] = "NEW LINE"
    base = clean_observations(frame)
    n = len(base)
    idx_te = np.array([n - 1])
    idx_tr = np.arange(n - 1)
    from soyensemble.components.splitters.types import Split

    ds = Dataset.from_frame(base, target="GY")
    split = Split(train=ds.take(idx_tr), test=ds.take(idx_te), idx_tr=idx_tr, idx_te=idx_te)
    views = build_views(base, split, ViewsModel())

    assert views.info["svm"]["cultivar_encoding"]["unseen_test_rows"] == 1
    assert views.svm_test.features["Cultivar_te"].iloc[0] == pytest.approx(base["GY"].iloc[:-1].mean())


def test_unknown_family_name(soybean_frame):
    _, _, views = _views(soybean_frame)
    with pytest.raises(KeyError):
        views.train("forest")


def test_base_table_is_not_modified(soybean_frame):
    base = clean_observations(soybean_frame)
    before = base.copy()
    split = holdout_split(Dataset.from_frame(base, target="GY"), rng=1)
    build_views(base, split, ViewsModel())
    pd.testing.assert_frame_equal(base, before)


def test_training_cultivar_encoding_excludes_own_yield(soybean_frame):
    base, split, views = _views(soybean_frame)
    rid = split.train.row_ids[5]

    bumped = base.copy()
    bumped.loc[rid, "GY"] += 10000.0
    again = build_views(bumped, split, ViewsModel())

    before = views.svm_train.features.loc[rid, "Cultivar_te"]
    after = again.svm_train.features.loc[rid, "Cultivar_te"]
    assert after == pytest.approx(before)
    # the same-cultivar rows in other folds do pick up the change
    assert not np.allclose(
        again.svm_train.features["Cultivar_te"].to_numpy(),
        views.svm_train.features["Cultivar_te"].to_numpy(),
    )


def test_cultivar_encoding_folds_follow_seed(soybean_frame):
    base = clean_observations(soybean_frame)
    split = holdout_split(Dataset.from_frame(base, target="GY"), rng=0)
    a = build_views(base, split, ViewsModel(), seed=11)
    b = build_views(base, split, ViewsModel(), seed=11)
    pd.testing.assert_series_equal(a.svm_train.features["Cultivar_te"], b.svm_train.features["Cultivar_te"])
    assert a.info["svm"]["cultivar_encoding"]["folds"] == 5
