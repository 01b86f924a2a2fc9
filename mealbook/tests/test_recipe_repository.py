import json
import os
import tempfile
import unittest
from mealbook.domain.Ingredient import Ingredient
from mealbook.domain.Recipe import Recipe
from mealbook.infra.Recipe_Repository import RecipeRepository, reading_from_recipes


def make_recipe(name, description=""):
    return Recipe(name=name, description=description, base_servings=2,
                  ingredients=[Ingredient("1", "Water", 1, "l")])


class TestRecipeRepository(unittest.TestCase):

    def setUp(self):
        self.repo = RecipeRepository(reading_from_recipes())

    def test_sample_recipes_keep_their_ids(self):
        self.assertEqual([r.id for r in self.repo.list()], ["1", "2"])
        self.assertEqual(self.repo.get("1").name, "Spaghetti Carbonara")

    def test_add_assigns_fresh_ids(self):
        first = self.repo.add(make_recipe("Soup"))
        second = self.repo.add(make_recipe("Stew"))
        self.assertNotIn(first.id, ("1", "2"))
        self.assertNotEqual(first.id, second.id)
        self.assertEqual(self.repo.list()[-1].name, "Stew")

    def test_ids_never_reused_after_delete(self):
        added = self.repo.add(make_recipe("Soup"))
        self.repo.delete(added.id)
        again = self.repo.add(make_recipe("Soup"))
        self.assertNotEqual(added.id, again.id)

    def test_update_replaces_whole_recipe(self):
        self.repo.update("1", make_recipe("Carbonara deluxe"))
        updated = self.repo.get("1")
        self.assertEqual(updated.id, "1")
        self.assertEqual(updated.name, "Carbonara deluxe")
        self.assertEqual(updated.base_servings, 2)

    def test_update_unknown_id_is_noop(self):
        self.repo.update("999", make_recipe("Ghost"))
        self.assertEqual(len(self.repo), 2)
        self.assertIsNone(self.repo.get("999"))

    def test_delete_unknown_id_is_noop(self):
        self.repo.delete("999")
        self.assertEqual(len(self.repo), 2)

    def test_get_none(self):
        self.assertIsNone(self.repo.get(None))

    def test_search(self):
        self.repo.add(make_recipe("Tomato soup", "Warming winter bowl"))
        self.assertEqual([r.name for r in self.repo.search("COOKIES")], ["Chocolate Chip Cookies"])
        self.assertEqual([r.name for r in self.repo.search("winter")], ["Tomato soup"])
        self.assertEqual(len(self.repo.search("")), 3)
        self.assertEqual(self.repo.search("nothing like this"), [])

    def test_reading_missing_file_returns_empty(self):
        self.assertEqual(reading_from_recipes("/no/such/recipes.json"), [])

    def test_reading_invalid_json_returns_empty(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "recipes.json")
            with open(path, "w", encoding="utf-8") as f:
                f.write("{not json")
            self.assertEqual(reading_from_recipes(path), [])

    def test_seed_with_stray_keys_loads(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "recipes.json")
            with open(path, "w", encoding="utf-8") as f:
                json.dump([{"id": "1", "name": "Toast", "ingredients": [], "prepTime": 5}], f)
            recipes = reading_from_recipes(path)
        self.assertEqual([r.name for r in recipes], ["Toast"])

    def test_seed_without_id_gets_one(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "recipes.json")
            with open(path, "w", encoding="utf-8") as f:
                json.dump([{"name": "Toast", "ingredients": []}], f)
            repo = RecipeRepository(reading_from_recipes(path))
        self.assertEqual(repo.list()[0].id, "1")


if __name__ == '__main__':
    unittest.main()
