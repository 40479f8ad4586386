"""
Recipe domain.

Responsibilities:
- Define the recipe, dietary restriction and dish type models.
- Hold the request/response schemas shared by the HTTP layer and the flows.
- Provide the stub recipe catalog used as the ``searchRecipes`` tool.
"""
