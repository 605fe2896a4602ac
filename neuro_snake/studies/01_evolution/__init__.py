"""
Study 01: Evolution

Does selection on survival time alone produce snakes that last longer?

Questions to explore:
- How fast does mean survival rise in the first generations?
- Does food eaten rise with it, even though it is not rewarded?
- What happens when every snake hits the tick cap?
"""
