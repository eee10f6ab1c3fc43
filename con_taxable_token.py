DECIMALS = 18
DEFAULT_TAX_PERCENTAGE = 4 # 4% on buys and sells against the liquidity pool
MAX_TRANSACTION_PERCENTAGE = 2 # non-exempt transfers are capped at 2% of supply
MAX_UINT256 = 2 ** 256 - 1 # allowance sentinel, never decremented

# Transfer categories
EXEMPT = 'EXEMPT'
LIQUIDITY_POOL_COUNTERPARTY = 'LIQUIDITY_POOL_COUNTERPARTY'
ORDINARY = 'ORDINARY'

balances = Hash(default_value=0)
approvals = Hash(default_value=0)
tax_excluded = Hash(default_value=False)
config = Hash()
metadata = Hash()

TransferEvent = LogEvent(
    event="Transfer",
    params={
        "from": {'type':str, 'idx':True},
        "to": {'type':str, 'idx':True},
        "amount": {'type':(int, float, decimal)}
    })

ApproveEvent = LogEvent(
    event="Approve",
    params={
        "from": {'type':str, 'idx':True},
        "to": {'type':str, 'idx':True},
        "amount": {'type':(int, float, decimal)}
    })

OwnershipTransferredEvent = LogEvent(
    event="OwnershipTransferred",
    params={
        "previous_owner": {'type':str, 'idx':True},
        "new_owner": {'type':str, 'idx':True}
    })

@construct
def seed(initial_supply: int, reward_pool: str, development_pool: str):
    require_amount(initial_supply)
    supply = initial_supply * 10 ** DECIMALS

    config['owner'] = ctx.caller
    config['reward_pool'] = reward_pool
    config['development_pool'] = development_pool
    config['tax_percentage'] = DEFAULT_TAX_PERCENTAGE
    config['total_supply'] = supply

    # Pools given at deployment stay exempt even if they are replaced later
    tax_excluded[reward_pool] = True
    tax_excluded[development_pool] = True

    balances[ctx.caller] = supply

    metadata['token_name'] = "TAXABLE TOKEN"
    metadata['token_symbol'] = "TAX"
    metadata['token_logo_url'] = ""
    metadata['token_website'] = ""
    metadata['decimals'] = DECIMALS

# --- Configuration ---
def load_config():
    return {
        'owner': config['owner'],
        'reward_pool': config['reward_pool'],
        'development_pool': config['development_pool'],
        'liquidity_pool': config['liquidity_pool'],
        'tax_percentage': config['tax_percentage'],
        'total_supply': config['total_supply']
    }

def assert_owner():
    assert ctx.caller == config['owner'], 'Only owner can call this method!'

def require_amount(amount):
    assert isinstance(amount, int) and amount >= 0, 'Amount must be a non-negative integer!'

def exempt_under(address, cfg):
    return address == cfg['owner'] or \
        address == cfg['reward_pool'] or \
        address == cfg['development_pool'] or \
        tax_excluded[address]

# --- Classifier & guard ---
def classify(sender, recipient, cfg):
    if exempt_under(sender, cfg) or exempt_under(recipient, cfg):
        return EXEMPT

    pool = cfg['liquidity_pool']
    # Buys and sells are taxed the same, a pool paying itself is not
    if pool and (sender == pool) != (recipient == pool):
        return LIQUIDITY_POOL_COUNTERPARTY

    return ORDINARY

def max_transaction_under(cfg):
    return cfg['total_supply'] * MAX_TRANSACTION_PERCENTAGE // 100

def check_max_transaction(amount, category, cfg):
    if category != EXEMPT:
        assert amount <= max_transaction_under(cfg), \
            'Transfer amount exceeds the max transaction amount!'

# --- Tax engine ---
def split_fee(amount, category, cfg):
    fee = 0
    if category == LIQUIDITY_POOL_COUNTERPARTY:
        fee = amount * cfg['tax_percentage'] // 100
        assert fee <= amount, 'Tax exceeds transfer amount!'

    reward_share = fee // 2

    return {
        'category': category,
        'fee': fee,
        'received': amount - fee,
        'reward_share': reward_share,
        # Odd unit of an odd fee goes to the development pool
        'development_share': fee - reward_share
    }

def add_delta(deltas, address, delta):
    if address in deltas:
        deltas[address] += delta
    else:
        deltas[address] = delta

def stage_transfer(amount, sender, recipient, cfg):
    category = classify(sender, recipient, cfg)
    check_max_transaction(amount, category, cfg)

    sender_bal = balances[sender]
    assert sender_bal >= amount, 'Transfer amount exceeds balance!'

    split = split_fee(amount, category, cfg)

    deltas = {}
    add_delta(deltas, sender, -amount)
    add_delta(deltas, recipient, split['received'])
    if split['fee'] > 0:
        add_delta(deltas, cfg['reward_pool'], split['reward_share'])
        add_delta(deltas, cfg['development_pool'], split['development_share'])

    split['deltas'] = deltas
    return split

def apply_transfer(staged, sender, recipient, cfg):
    # Only called once every precondition has passed
    for address, delta in staged['deltas'].items():
        if delta != 0:
            balances[address] += delta

    TransferEvent({"from": sender, "to": recipient, "amount": staged['received']})
    if staged['reward_share'] > 0:
        TransferEvent({"from": sender, "to": cfg['reward_pool'], "amount": staged['reward_share']})
    if staged['development_share'] > 0:
        TransferEvent({"from": sender, "to": cfg['development_pool'], "amount": staged['development_share']})

# --- Transfers ---
@export
def transfer(amount: int, to: str):
    require_amount(amount)
    sender = ctx.caller
    cfg = load_config()

    staged = stage_transfer(amount, sender, to, cfg)
    apply_transfer(staged, sender, to, cfg)
    return True

@export
def approve(amount: int, to: str):
    require_amount(amount)
    assert amount <= MAX_UINT256, 'Cannot approve more than the unlimited allowance!'

    approvals[ctx.caller, to] = amount
    ApproveEvent({"from": ctx.caller, "to": to, "amount": amount})
    return True

@export
def transfer_from(amount: int, to: str, main_account: str):
    require_amount(amount)
    spender = ctx.caller
    cfg = load_config()

    allowance_left = approvals[main_account, spender]
    unlimited = allowance_left == MAX_UINT256
    assert unlimited or allowance_left >= amount, 'Transfer amount exceeds allowance!'

    staged = stage_transfer(amount, main_account, to, cfg)

    if not unlimited:
        approvals[main_account, spender] = allowance_left - amount
    apply_transfer(staged, main_account, to, cfg)
    return True

# --- Owner-gated configuration ---
@export
def set_tax_percentage(percentage: int):
    assert_owner()
    assert isinstance(percentage, int) and percentage >= 0, \
        'Tax percentage must be a non-negative integer!'
    config['tax_percentage'] = percentage

@export
def set_reward_pool(address: str):
    assert_owner()
    config['reward_pool'] = address

@export
def set_development_pool(address: str):
    assert_owner()
    config['development_pool'] = address

@export
def set_liquidity_pool(address: str):
    assert_owner()
    config['liquidity_pool'] = address

@export
def set_tax_excluded(address: str, is_excluded: bool):
    assert_owner()
    tax_excluded[address] = is_excluded

@export
def transfer_ownership(new_owner: str):
    assert_owner()
    previous_owner = config['owner']
    config['owner'] = new_owner
    OwnershipTransferredEvent({"previous_owner": previous_owner, "new_owner": new_owner})

@export
def change_metadata(key: str, value: Any):
    assert_owner()
    metadata[key] = value

# --- Views ---
@export
def balance_of(address: str):
    return balances[address]

@export
def allowance(owner: str, spender: str):
    return approvals[owner, spender]

@export
def get_owner():
    return config['owner']

@export
def get_reward_pool():
    return config['reward_pool']

@export
def get_development_pool():
    return config['development_pool']

@export
def get_liquidity_pool():
    return config['liquidity_pool']

@export
def get_tax_percentage():
    return config['tax_percentage']

@export
def get_total_supply():
    return config['total_supply']

@export
def get_max_transaction_amount():
    return max_transaction_under(load_config())

@export
def is_exempt(address: str):
    return exempt_under(address, load_config())

@export
def classify_transfer(sender: str, recipient: str):
    return classify(sender, recipient, load_config())

@export
def quote_transfer(amount: int, sender: str, recipient: str):
    require_amount(amount)
    cfg = load_config()
    return split_fee(amount, classify(sender, recipient, cfg), cfg)
