from msl_core.parser.msl_parser import MSLParser, parse_script

__all__ = ['MSLParser', 'parse_script']
