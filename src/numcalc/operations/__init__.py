"""
Operation modules. Every function tagged with @operation in a module of this
package is picked up by numcalc.registry.discover().
"""
