"""Render tabbed sections in 3 lines, with no config and no deps."""

from pestanas import to_html

html = to_html('=== "C++"\n    Hello from C++\n\n=== "Python"\n    Hello from Python\n')
print(html)
