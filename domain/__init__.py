"""Describes the Mealbook domain. Two halves that never meet.

- Recipes come from TheMealDB. We own none of them, only the shape we hand
  out. When the API is down or says nothing, the answer is "nothing this
  time", never an error.
- Favorites are ours. One row per user and recipe, and a failed write has to
  reach the caller so it can be retried.

The user is always passed in. Who is signed in is somebody else's problem.
"""
