from pyln.routebuilder.cli import main
from test_invoice import BOLT11, SECRET
import os
import pytest


INPUT = """path_id,channel_name,cltv_delta,base_fee_msat,proportional_fee_ppm
0,alice-bob,40,1000,10
0,bob-dave,65,2000,500
1,alice-dave,15,0,3000
"""

METADATA = '0000000000000008' '0000000000000028' + SECRET + '00000000000186a0'

EXPECTED = (
    "path_id,channel_name,htlc_amount_msat,htlc_expiry,tlv\n"
    "0,alice-bob,53025,800070,NULL\n"
    "0,bob-dave,52025,800005," + METADATA + "\n"
    "1,alice-dave,50150,800005," + METADATA + "\n"
)


@pytest.fixture(autouse=True)
def clean_env(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv('ROUTEBUILDER_LOG_LEVEL', raising=False)
    monkeypatch.delenv('ROUTEBUILDER_OUTPUT_FILENAME', raising=False)


@pytest.fixture
def input_csv(tmp_path):
    p = tmp_path / 'input.csv'
    p.write_text(INPUT)
    return str(p)


def test_main(tmp_path, input_csv, capsys):
    outdir = tmp_path / 'out'
    assert(main([str(outdir), input_csv, BOLT11, '800000']) == 0)

    dest = outdir / 'output.csv'
    assert(dest.read_text() == EXPECTED)
    assert("Successfully wrote output to {}".format(dest) in capsys.readouterr().out)


def test_main_is_deterministic(tmp_path, input_csv):
    assert(main([str(tmp_path / 'a'), input_csv, BOLT11, '800000']) == 0)
    assert(main([str(tmp_path / 'b'), input_csv, BOLT11, '800000']) == 0)
    a = (tmp_path / 'a' / 'output.csv').read_bytes()
    b = (tmp_path / 'b' / 'output.csv').read_bytes()
    assert(a == b)


def test_output_name(tmp_path, input_csv, monkeypatch):
    monkeypatch.setenv('ROUTEBUILDER_OUTPUT_FILENAME', 'from-env.csv')
    assert(main([str(tmp_path), input_csv, BOLT11, '800000']) == 0)
    assert((tmp_path / 'from-env.csv').read_text() == EXPECTED)

    assert(main([str(tmp_path), input_csv, BOLT11, '800000',
                 '--output-name', 'from-flag.csv']) == 0)
    assert((tmp_path / 'from-flag.csv').read_text() == EXPECTED)


def test_indivisible_amount_writes_nothing(tmp_path, input_csv):
    with open(input_csv, 'a') as f:
        f.write("2,alice-frank,15,0,0\n")

    outdir = tmp_path / 'out'
    assert(main([str(outdir), input_csv, BOLT11, '800000']) == 1)
    assert(not (outdir / 'output.csv').exists())


def test_bad_payment_request(tmp_path, input_csv):
    assert(main([str(tmp_path / 'out'), input_csv, BOLT11[:-1] + 'q', '800000']) == 1)
    assert(not os.path.exists(str(tmp_path / 'out')))


def test_missing_input(tmp_path):
    assert(main([str(tmp_path), str(tmp_path / 'nope.csv'), BOLT11, '800000']) == 1)


def test_height_overflow(tmp_path, input_csv):
    assert(main([str(tmp_path), input_csv, BOLT11, str(2**32)]) == 1)
    assert(not (tmp_path / 'output.csv').exists())


@pytest.mark.parametrize('argv', [
    [],
    ['out', 'in.csv', BOLT11],
    ['out', 'in.csv', BOLT11, '-5'],
    ['out', 'in.csv', BOLT11, 'tip'],
    ['out', 'in.csv', BOLT11, '1', '--log-level', 'chatty'],
])
def test_usage_errors(argv):
    with pytest.raises(SystemExit) as e:
        main(argv)
    assert(e.value.code == 2)


def test_invalid_utf8_input(tmp_path, input_csv):
    with open(input_csv, 'ab') as f:
        f.write(b'0,\xff\xfe,15,0,10\n')

    outdir = tmp_path / 'out'
    assert(main([str(outdir), input_csv, BOLT11, '800000']) == 1)
    assert(not (outdir / 'output.csv').exists())


def test_bom_prefixed_input(tmp_path, input_csv):
    with open(input_csv, 'rb') as f:
        data = f.read()
    with open(input_csv, 'wb') as f:
        f.write(b'\xef\xbb\xbf' + data)

    assert(main([str(tmp_path / 'out'), input_csv, BOLT11, '800000']) == 0)
    assert((tmp_path / 'out' / 'output.csv').read_text() == EXPECTED)


@pytest.mark.parametrize('source', ['env', 'vars'])
def test_invalid_configured_log_level(tmp_path, input_csv, monkeypatch, source):
    if source == 'env':
        monkeypatch.setenv('ROUTEBUILDER_LOG_LEVEL', 'chatty')
    else:
        (tmp_path / 'routebuilder.vars').write_text("ROUTEBUILDER_LOG_LEVEL=chatty\n")

    with pytest.raises(SystemExit) as e:
        main([str(tmp_path / 'out'), input_csv, BOLT11, '800000'])
    assert(e.value.code == 2)
    assert(not (tmp_path / 'out').exists())


def test_configured_log_level_is_case_insensitive(tmp_path, input_csv, monkeypatch):
    monkeypatch.setenv('ROUTEBUILDER_LOG_LEVEL', 'debug')
    assert(main([str(tmp_path / 'out'), input_csv, BOLT11, '800000']) == 0)
