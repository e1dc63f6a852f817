"""
Menu planner REST API: recipes, dated menus, family groups and menu shares.

Run with:
    uvicorn menu_api.main:app --port 3000
"""
