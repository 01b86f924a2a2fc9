import unittest
from fastapi.testclient import TestClient
from mealbook.api.api_run import create_app
from mealbook.infra.tickers import ManualTicker


class TestRecipeDetail(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.client = TestClient(create_app(seed=True, ticker=ManualTicker()))

    def test_recipe_detail_ok(self):
        resp = self.client.get('/recipes/1')
        self.assertEqual(resp.status_code, 200)
        body = resp.text
        self.assertIn('Spaghetti Carbonara', body)
        self.assertIn('Original recipe serves 4', body)
        self.assertIn('400.00 g', body)
        self.assertIn('Ingredients', body)
        self.assertIn('Fry pancetta until crispy.', body)
        self.assertIn('/recipes/1/edit', body)

    def test_recipe_detail_scaled(self):
        body = self.client.get('/recipes/1?servings=8').text
        self.assertIn('800.00 g', body)
        self.assertIn('value="8"', body)

    def test_recipe_detail_bad_servings_clamped(self):
        body = self.client.get('/recipes/1?servings=-2').text
        self.assertIn('100.00 g', body)
        self.assertIn('value="1"', body)

    def test_recipe_detail_timer_widget(self):
        body = self.client.get('/recipes/2').text
        self.assertIn('Total cooking time: 10 min', body)
        self.assertIn('data-ingredient="8"', body)
        self.assertIn('10:00', body)

    def test_recipe_detail_not_found(self):
        resp = self.client.get('/recipes/ThisRecipeDoesNotExistXYZ')
        self.assertEqual(resp.status_code, 404)
        self.assertIn('Recipe not found', resp.text)
        self.assertIn('Go back home', resp.text)

    def test_unknown_page(self):
        resp = self.client.get('/no/such/page')
        self.assertEqual(resp.status_code, 404)
        self.assertIn('Page not found', resp.text)

    def test_wrong_method_on_page_shows_not_found_view(self):
        resp = self.client.get('/recipes')
        self.assertEqual(resp.status_code, 405)
        self.assertIn('Page not found', resp.text)
        self.assertIn('Go back home', resp.text)

    def test_wrong_method_on_api_stays_json(self):
        resp = self.client.get('/api/meal-plan/cell')
        self.assertEqual(resp.status_code, 405)
        self.assertEqual(resp.json(), {'detail': 'Method Not Allowed'})


class TestRecipeList(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.client = TestClient(create_app(seed=True, ticker=ManualTicker()))

    def test_lists_all(self):
        body = self.client.get('/').text
        self.assertIn('Spaghetti Carbonara', body)
        self.assertIn('Chocolate Chip Cookies', body)
        self.assertIn('Serves 24', body)

    def test_search_filters(self):
        body = self.client.get('/', params={'q': 'carbo'}).text
        self.assertIn('Spaghetti Carbonara', body)
        self.assertNotIn('Chocolate Chip Cookies', body)

    def test_search_matches_description(self):
        body = self.client.get('/', params={'q': 'CHEWY'}).text
        self.assertIn('Chocolate Chip Cookies', body)

    def test_search_no_results(self):
        body = self.client.get('/', params={'q': 'zzz'}).text
        self.assertIn('No recipes found. Create your first recipe!', body)

    def test_empty_catalog(self):
        client = TestClient(create_app(seed=False, ticker=ManualTicker()))
        self.assertIn('No recipes found. Create your first recipe!', client.get('/').text)


class TestCreatedRecipeDetail(unittest.TestCase):
    def setUp(self):
        self.app = create_app(seed=False, ticker=ManualTicker())
        self.client = TestClient(self.app)

    def _create(self, name):
        resp = self.client.post('/recipes', data={
            'name': name,
            'base_servings': '4',
            'instructions': 'Boil\nServe',
            'ingredient_id': ['1'],
            'ingredient_name': ['Pasta'],
            'ingredient_quantity': ['400'],
            'ingredient_unit': ['g'],
            'ingredient_cooking_time': [''],
        }, follow_redirects=False)
        self.assertEqual(resp.status_code, 303)
        return self.app.state.recipes.list()[-1].id

    def test_created_recipe_scales_on_detail_page(self):
        recipe_id = self._create('Pasta for a crowd')
        body = self.client.get(f'/recipes/{recipe_id}', params={'servings': 8}).text
        self.assertIn('Pasta for a crowd', body)
        self.assertIn('800.00 g', body)

    def test_recipe_name_is_not_executable_in_delete_confirm(self):
        recipe_id = self._create("x');alert(1);('")
        body = self.client.get(f'/recipes/{recipe_id}').text
        self.assertNotIn('onsubmit', body)
        self.assertIn('data-confirm-delete="x&#39;);alert(1);(&#39;"', body)
        self.assertNotIn("alert(1);('", body)


if __name__ == '__main__':
    unittest.main()
