# Dedicated to the public domain under CC0: https://creativecommons.org/publicdomain/zero/1.0/.

'''
mkmd constants.
'''


dflt_config_name = 'Makefile.md'

dflt_script_shell = ('bash', '-eo', 'pipefail')
command_shell = ('sh', '-c')

# Exit codes.
exit_ok = 0
exit_config_missing = 1
exit_config_unreadable = 2
exit_missing_file = 3
exit_recipe_failed = 4
exit_unknown_target = 5
exit_invalid_style = 6
exit_circular_dependency = 7

# Substitution tokens.
tok_dirname = '{dirname}'
tok_target = '{target}'
tok_first_dep = '{0}'

pattern_prefix = '*.'
allow_prefix = 'allow='
