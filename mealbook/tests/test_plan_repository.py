import unittest
from mealbook.domain.Plan import Cell
from mealbook.infra.Plan_Repository import PlanRepository, is_valid_slot
from mealbook.infra.Recipe_Repository import RecipeRepository, reading_from_recipes


class TestPlanRepository(unittest.TestCase):

    def setUp(self):
        self.recipes = RecipeRepository(reading_from_recipes())
        self.repo = PlanRepository()

    def test_new_plan_is_empty(self):
        cell = self.repo.get_cell("Tuesday", "Lunch")
        self.assertTrue(cell.is_empty())
        self.assertFalse(cell.rotate)

    def test_set_cell_last_write_wins(self):
        self.repo.set_cell("Monday", "Dinner", "1")
        self.repo.set_cell("Monday", "Dinner", "2")
        self.assertEqual(self.repo.get_cell("Monday", "Dinner").recipe_id, "2")

    def test_set_cell_resets_rotate(self):
        self.repo.set_cell("Monday", "Dinner", "1")
        self.repo.toggle_rotation("Monday", "Dinner")
        self.repo.set_cell("Monday", "Dinner", "2")
        self.assertEqual(self.repo.get_cell("Monday", "Dinner"), Cell("2", False))

    def test_toggle_twice_restores_flag(self):
        self.repo.set_cell("Friday", "Snack", "2")
        self.repo.toggle_rotation("Friday", "Snack")
        self.assertTrue(self.repo.get_cell("Friday", "Snack").rotate)
        self.repo.toggle_rotation("Friday", "Snack")
        self.assertEqual(self.repo.get_cell("Friday", "Snack"), Cell("2", False))

    def test_clear_cell(self):
        self.repo.set_cell("Monday", "Lunch", "1", rotate=True)
        self.repo.set_cell("Monday", "Lunch", None)
        self.assertEqual(self.repo.get_cell("Monday", "Lunch"), Cell())

    def test_get_cell_returns_copy(self):
        self.repo.get_cell("Monday", "Lunch").recipe_id = "1"
        self.assertTrue(self.repo.get_cell("Monday", "Lunch").is_empty())

    def test_dangling_reference_resolves_to_nothing(self):
        self.repo.set_cell("Thursday", "Breakfast", "1", rotate=True)
        self.recipes.delete("1")
        self.assertIsNone(self.repo.resolve("Thursday", "Breakfast", self.recipes))
        # the stored id is left in place
        self.assertEqual(self.repo.get_cell("Thursday", "Breakfast").recipe_id, "1")
        view = self.repo.week_view(self.recipes)["Thursday"]["Breakfast"]
        self.assertEqual(view, {"recipe_id": "1", "recipe_name": None, "rotate": False})

    def test_week_view(self):
        self.repo.set_cell("Saturday", "Dinner", "2", rotate=True)
        view = self.repo.week_view(self.recipes)
        self.assertEqual(view["Saturday"]["Dinner"],
                         {"recipe_id": "2", "recipe_name": "Chocolate Chip Cookies", "rotate": True})
        self.assertIsNone(view["Monday"]["Breakfast"]["recipe_name"])
        self.assertEqual(len(view), 7)
        self.assertEqual(len(view["Monday"]), 4)

    def test_is_valid_slot(self):
        self.assertTrue(is_valid_slot("Sunday", "Snack"))
        self.assertFalse(is_valid_slot("Funday", "Snack"))
        self.assertFalse(is_valid_slot("Monday", "Brunch"))


if __name__ == '__main__':
    unittest.main()
