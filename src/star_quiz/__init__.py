"""Star chart viewport and identification quiz.

This package provides the pieces of an interactive star quiz:
- Viewport: pan/zoom state and RA/Dec to screen projection
- Renderer: per-frame draw list (grid, star glow, star disc)
- Hit tester: screen click to nearest visible star
- Quiz engine: distractor selection, grading, and running score

A presentation layer drives everything through StarQuizController.
"""

__all__: list[str] = []
