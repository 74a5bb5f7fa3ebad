"""Pre-shared group parameters for the Chaum-Pedersen protocol.

The group is the 1024-bit MODP group with a 160-bit prime order subgroup
from RFC 5114, section 2.1. ``G`` is the RFC generator, ``2^((P-1)/Q) mod P``;
``H`` is derived the same way from 3, so no discrete log relation between
the two generators is known.
"""

P = int(
    "B10B8F96A080E01DDE92DE5EAE5D54EC52C99FBCFB06A3C69A6A9DCA52D23B61"
    "6073E28675A23D189838EF1E2EE652C013ECB4AEA906112324975C3CD49B83BF"
    "ACCBDD7D90C4BD7098488E9C219A73724EFFD6FAE5644738FAA31A4FF55BCCC0"
    "A151AF5F0DC8B4BD45BF37DF365C1A65E68CFDA76D4DA708DF1FB2BC2E4A4371",
    16,
)

Q = int("F518AA8781A8DF278ABA4E7D64B7CB9D49462353", 16)

G = int(
    "A4D1CBD5C3FD34126765A442EFB99905F8104DD258AC507FD6406CFF14266D31"
    "266FEA1E5C41564B777E690F5504F213160217B4B01B886A5E91547F9E2749F4"
    "D7FBD7D3B9A92EE1909D0D2263F80A76A6A24C087A091F531DBF0A0169B6A28A"
    "D662A4D18E73AFA32D779D5918D08BC8858F4DCEF97C2A24855E6EEB22B3B2E5",
    16,
)

H = int(
    "4DE54C2E964092ADD43C7AC8907BD72A216339450C1FD08CED0008CBE09C5F02"
    "31DA87BAB14A569062C64F24A676E0E240F78D951C26222DDD8D9DE2D61E7E33"
    "BA3403919DD77E42AE8E9E96BFCE31B21670988D8A5DCEB26F65C543A25E5652"
    "17DCB5D996EAF467E656CE86F28903B80353B19FCA4E75A4DDF61528E7775251",
    16,
)

# Characters in every generated auth id and session id.
ID_LENGTH = 24
ID_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789"
