from ghtree.print_tree import run

run()
