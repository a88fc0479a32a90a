from __future__ import annotations

from src.app.domain.models import Recipe, RecipeCategory, RecipeStatus
from src.app.services.catalog_query import build_catalog_query, refine


def _recipe(recipe_id: int, prep: int | None = None, cook: int | None = None) -> Recipe:
    return Recipe(
        id=recipe_id,
        title=f"Recipe {recipe_id}",
        description="desc",
        ingredients=["x"],
        steps=["y"],
        status=RecipeStatus.APPROVED,
        prep_time=prep,
        cook_time=cook,
    )


class TestBuildCatalogQuery:
    def test_no_filters(self) -> None:
        query = build_catalog_query()

        assert query.status == RecipeStatus.APPROVED
        assert query.category is None
        assert query.search is None
        assert query.max_total_time is None

    def test_known_category(self) -> None:
        assert build_catalog_query(category="dessert").category == RecipeCategory.DESSERT

    def test_category_is_case_insensitive(self) -> None:
        assert build_catalog_query(category=" Dessert ").category == RecipeCategory.DESSERT

    def test_unknown_category_is_ignored(self) -> None:
        assert build_catalog_query(category="invalid-category").category is None

    def test_blank_search_is_ignored(self) -> None:
        assert build_catalog_query(search="   ").search is None

    def test_search_is_trimmed(self) -> None:
        assert build_catalog_query(search="  apple ").search == "apple"

    def test_search_strips_filter_syntax(self) -> None:
        assert build_catalog_query(search="pie,(title.eq.x)*%").search == "pie title.eq.x"

    def test_max_total_time(self) -> None:
        assert build_catalog_query(max_total_time="30").max_total_time == 30
        assert build_catalog_query(max_total_time=45).max_total_time == 45

    def test_malformed_max_total_time_is_ignored(self) -> None:
        assert build_catalog_query(max_total_time="soon").max_total_time is None
        assert build_catalog_query(max_total_time="-5").max_total_time is None
        assert build_catalog_query(max_total_time="").max_total_time is None


class TestRefine:
    def test_without_limit_keeps_everything(self) -> None:
        recipes = [_recipe(1, 100, 100), _recipe(2)]
        assert refine(recipes, build_catalog_query()) == recipes

    def test_limit_drops_slow_recipes(self) -> None:
        quick = _recipe(1, prep=10, cook=15)
        exact = _recipe(2, prep=30)
        slow = _recipe(3, prep=20, cook=40)
        untimed = _recipe(4)

        result = refine([quick, exact, slow, untimed], build_catalog_query(max_total_time=30))

        assert [r.id for r in result] == [1, 2, 4]
