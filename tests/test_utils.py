import subprocess
from pathlib import Path

import pytest
import sh

from booster_harness.utils import parse_template_option, require_command, run_kubectl


def test_require_command_found(mocker):
    which = mocker.patch('booster_harness.utils.sh.which')
    require_command('oc')
    which.assert_called_once_with('oc')


def test_require_command_missing(mocker):
    mocker.patch('booster_harness.utils.sh.which', side_effect=sh.ErrorReturnCode_1('which oc', b'', b''))
    with pytest.raises(RuntimeError, match="Required command 'oc' not found"):
        require_command('oc')


def test_run_kubectl_success(mocker):
    run = mocker.patch('booster_harness.utils.subprocess.run',
                       return_value=subprocess.CompletedProcess([], 0, stdout='{}', stderr=''))
    assert run_kubectl(['get', 'pods'], timeout=5, binary='kubectl', stdin='x') == (True, '{}', '')
    run.assert_called_once_with(['kubectl', 'get', 'pods'], input='x', capture_output=True, text=True, timeout=5)


def test_run_kubectl_failure(mocker):
    mocker.patch('booster_harness.utils.subprocess.run',
                 return_value=subprocess.CompletedProcess([], 1, stdout='', stderr='boom'))
    assert run_kubectl(['get', 'pods']) == (False, '', 'boom')


@pytest.mark.parametrize('exc', [
    subprocess.TimeoutExpired(['oc'], 5),
    FileNotFoundError('oc'),
])
def test_run_kubectl_process_errors(mocker, exc):
    mocker.patch('booster_harness.utils.subprocess.run', side_effect=exc)
    ok, stdout, stderr = run_kubectl(['get', 'pods'])
    assert not ok
    assert stdout == ''
    assert stderr


def test_parse_template_option():
    assert parse_template_option('database=templates/db.yml') == ('database', Path('templates/db.yml'))


@pytest.mark.parametrize('value', ['database', '=db.yml', 'database=', ' = '])
def test_parse_template_option_invalid(value):
    with pytest.raises(ValueError, match='NAME=PATH'):
        parse_template_option(value)
