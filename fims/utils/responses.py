"""
Uniform JSON envelopes: {"success": ..., "message": ..., "data": ...}
"""
from flask import jsonify


def success_resp(message, data=None, status_code=200):
    return jsonify({
        'success': True,
        'message': message,
        'data': data
    }), status_code


def error_resp(message, status_code=500):
    return jsonify({
        'success': False,
        'message': message,
        'data': None
    }), status_code
